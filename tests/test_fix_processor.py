import pytest
from unittest.mock import Mock, patch

import git

from phpfix_core.fix_processor import FixProcessor
from phpfix_core.result import ResultStatus
from phpfix_core.whitespaces_config import ConfigStore, WhitespacesConfig


UNFIXED = '<?php\nclass A {\n    function __construct($a, $b) {}\n}\n'
FIXED = '<?php\nclass A {\n    function __construct(\n        $a,\n        $b\n    ) {}\n}\n'
CLEAN = '<?php\nclass B {\n    function __construct($a) {}\n}\n'


@pytest.fixture
def processor():
    return FixProcessor()


@pytest.fixture
def no_git():
    with patch.object(FixProcessor, '_collect_git_files', return_value=None):
        yield


class TestFixProcessorInitialization:
    def test_defaults_to_all_fixers(self, processor):
        assert [f.get_id() for f in processor.fixers] == ['constructor_multiline']

    def test_uses_requested_fixers(self):
        processor = FixProcessor(fixer_ids=[])
        assert processor.fixers == []

    def test_rejects_unknown_fixer(self):
        with pytest.raises(ValueError):
            FixProcessor(fixer_ids=['no_such_fixer'])

    def test_reads_config_file(self, temp_dir):
        config_path = temp_dir / 'phpfix.json'
        config_path.write_text('{"indent": "\\t", "fixers": []}')
        ConfigStore.reset(config_path)

        processor = FixProcessor()
        assert processor.whitespaces == WhitespacesConfig(indent='\t')
        assert processor.fixers == []

    def test_explicit_arguments_override_config(self, temp_dir):
        config_path = temp_dir / 'phpfix.json'
        config_path.write_text('{"indent": "\\t", "fixers": []}')
        ConfigStore.reset(config_path)

        processor = FixProcessor(fixer_ids=['constructor_multiline'], whitespaces=WhitespacesConfig())
        assert processor.whitespaces == WhitespacesConfig()
        assert len(processor.fixers) == 1


class TestFixProcessorFixCode:
    def test_fixes_code(self, processor):
        assert processor.fix_code(UNFIXED) == FIXED

    def test_leaves_clean_code_alone(self, processor):
        assert processor.fix_code(CLEAN) == CLEAN

    def test_skips_unsupported_file_types(self, processor, temp_dir):
        assert processor.fix_code(UNFIXED, temp_dir / 'a.txt') == UNFIXED


class TestFixProcessorFixFile:
    def test_rewrites_changed_file(self, processor, temp_dir):
        php_file = temp_dir / 'a.php'
        php_file.write_text(UNFIXED)

        file_result = processor.fix_file(php_file)

        assert file_result.changed
        assert file_result.ok
        assert php_file.read_text() == FIXED

    def test_dry_run_does_not_write(self, processor, temp_dir):
        php_file = temp_dir / 'a.php'
        php_file.write_text(UNFIXED)

        file_result = processor.fix_file(php_file, dry_run=True)

        assert file_result.changed
        assert php_file.read_text() == UNFIXED

    def test_unchanged_file_is_not_rewritten(self, processor, temp_dir):
        php_file = temp_dir / 'b.php'
        php_file.write_text(CLEAN)

        with patch('phpfix_core.fix_processor.open', wraps=open, create=True) as mock_open:
            file_result = processor.fix_file(php_file)

        assert not file_result.changed
        assert [c.args[1] for c in mock_open.call_args_list] == ['r']

    def test_preserves_crlf_line_endings(self, temp_dir):
        processor = FixProcessor(whitespaces=WhitespacesConfig(line_ending='\r\n'))
        php_file = temp_dir / 'a.php'
        php_file.write_bytes(UNFIXED.replace('\n', '\r\n').encode('utf-8'))

        processor.fix_file(php_file)

        assert php_file.read_bytes() == FIXED.replace('\n', '\r\n').encode('utf-8')

    def test_keeps_crlf_line_endings_by_default(self, processor, temp_dir):
        php_file = temp_dir / 'a.php'
        php_file.write_bytes(UNFIXED.replace('\n', '\r\n').encode('utf-8'))

        processor.fix_file(php_file)

        assert php_file.read_bytes() == FIXED.replace('\n', '\r\n').encode('utf-8')

    def test_missing_file_is_reported(self, processor, temp_dir):
        file_result = processor.fix_file(temp_dir / 'missing.php')
        assert not file_result.ok
        assert not file_result.changed

    def test_undecodable_file_is_reported(self, processor, temp_dir):
        php_file = temp_dir / 'latin1.php'
        php_file.write_bytes(b'<?php\n$a = "\xe9";\n')

        file_result = processor.fix_file(php_file)

        assert not file_result.ok

    def test_non_php_file_is_skipped(self, processor, temp_dir):
        text_file = temp_dir / 'notes.txt'
        text_file.write_text(UNFIXED)

        file_result = processor.fix_file(text_file)

        assert not file_result.changed
        assert text_file.read_text() == UNFIXED


class TestFixProcessorCollectFiles:
    def test_single_file(self, processor, temp_dir):
        php_file = temp_dir / 'a.php'
        php_file.write_text(CLEAN)
        assert processor.collect_files(php_file) == [php_file]

    def test_missing_path_raises(self, processor, temp_dir):
        with pytest.raises(FileNotFoundError):
            processor.collect_files(temp_dir / 'missing')

    def test_directory_without_git_skips_vendor(self, processor, temp_dir, no_git):
        (temp_dir / 'src').mkdir()
        (temp_dir / 'vendor' / 'lib').mkdir(parents=True)
        (temp_dir / 'src' / 'a.php').write_text(CLEAN)
        (temp_dir / 'b.php').write_text(CLEAN)
        (temp_dir / 'vendor' / 'lib' / 'c.php').write_text(CLEAN)
        (temp_dir / 'src' / 'readme.md').write_text('x')

        assert processor.collect_files(temp_dir) == [temp_dir / 'b.php', temp_dir / 'src' / 'a.php']

    def test_directory_in_git_work_tree_uses_ls_files(self, processor, temp_dir):
        (temp_dir / 'sub').mkdir()
        (temp_dir / 'a.php').write_text(CLEAN)
        (temp_dir / 'sub' / 'b.php').write_text(CLEAN)
        (temp_dir / 'ignored.php').write_text(CLEAN)
        (temp_dir / 'README.md').write_text('x')

        mock_repo = Mock()
        mock_repo.working_tree_dir = str(temp_dir)
        mock_repo.git.ls_files.return_value = 'a.php\0sub/b.php\0README.md\0deleted.php\0'

        with patch('phpfix_core.fix_processor.git.Repo', return_value=mock_repo) as mock_repo_cls:
            files = processor.collect_files(temp_dir)

        mock_repo_cls.assert_called_once_with(temp_dir, search_parent_directories=True)
        assert files == [temp_dir / 'a.php', temp_dir / 'sub' / 'b.php']

    def test_git_failure_falls_back_to_glob(self, processor, temp_dir):
        (temp_dir / 'a.php').write_text(CLEAN)

        mock_repo = Mock()
        mock_repo.working_tree_dir = str(temp_dir)
        mock_repo.git.ls_files.side_effect = git.GitCommandError('ls-files', 128)

        with patch('phpfix_core.fix_processor.git.Repo', return_value=mock_repo):
            assert processor.collect_files(temp_dir) == [temp_dir / 'a.php']

    def test_not_a_git_repository_falls_back_to_glob(self, processor, temp_dir):
        (temp_dir / 'a.php').write_text(CLEAN)

        with patch('phpfix_core.fix_processor.git.Repo', side_effect=git.InvalidGitRepositoryError):
            assert processor.collect_files(temp_dir) == [temp_dir / 'a.php']


class TestFixProcessorFixPaths:
    def test_all_files_fixed(self, processor, temp_dir, no_git):
        (temp_dir / 'a.php').write_text(UNFIXED)
        (temp_dir / 'b.php').write_text(CLEAN)

        result = processor.fix_paths([temp_dir])

        assert result.status == ResultStatus.SUCCESS
        assert result.changed_files == [str(temp_dir / 'a.php')]
        assert result.message == '1 of 2 files fixed'
        assert (temp_dir / 'a.php').read_text() == FIXED

    def test_dry_run_message(self, processor, temp_dir, no_git):
        (temp_dir / 'a.php').write_text(UNFIXED)

        result = processor.fix_paths([temp_dir], dry_run=True)

        assert result.message == '1 of 1 files need fixing'
        assert (temp_dir / 'a.php').read_text() == UNFIXED

    def test_no_files(self, processor, temp_dir, no_git):
        result = processor.fix_paths([temp_dir])
        assert result.status == ResultStatus.SUCCESS
        assert result.file_results == []

    def test_partial_failure(self, processor, temp_dir, no_git):
        (temp_dir / 'a.php').write_text(UNFIXED)

        result = processor.fix_paths([temp_dir, temp_dir / 'missing'])

        assert result.status == ResultStatus.PARTIAL
        assert '1 failed' in result.message

    def test_all_failed(self, processor, temp_dir):
        result = processor.fix_paths([temp_dir / 'missing.php'])
        assert result.status == ResultStatus.FAILED
