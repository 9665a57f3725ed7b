import pytest

from phpfix_core.fixers.base_fixer import BaseFixer
from phpfix_core.fixers.constructor_multiline import ConstructorMultilineFixer
from phpfix_core.fixers.fixer_factory import FixerFactory
from phpfix_core.whitespaces_config import WhitespacesConfig


class TestFixerFactory:
    def test_from_id_creates_fixer(self):
        fixer = FixerFactory.from_id('constructor_multiline')
        assert isinstance(fixer, ConstructorMultilineFixer)
        assert isinstance(fixer, BaseFixer)

    def test_from_id_passes_whitespaces(self):
        whitespaces = WhitespacesConfig(indent='\t')
        fixer = FixerFactory.from_id('constructor_multiline', whitespaces)
        assert fixer.whitespaces is whitespaces
        assert fixer.emitter.whitespaces is whitespaces

    def test_from_id_rejects_unknown_fixer(self):
        with pytest.raises(ValueError, match='Unsupported fixer'):
            FixerFactory.from_id('no_such_fixer')

    def test_create_all(self):
        fixers = FixerFactory.create_all()
        assert [f.get_id() for f in fixers] == ['constructor_multiline']

    def test_get_available_fixers(self):
        assert FixerFactory.get_available_fixers() == [
            {'id': 'constructor_multiline', 'name': 'Constructor Multiline'}
        ]

    def test_metadata(self):
        metadata = FixerFactory.from_id('constructor_multiline').get_metadata()
        assert metadata['id'] == 'constructor_multiline'
        assert metadata['risky'] is False
        assert len(metadata['definition']['code_samples']) == 2
