from typing import Any, Dict, List, Optional


class CodeSample:
    """A PHP snippet shown in a fixer's documentation."""

    def __init__(self, code: str):
        self.code = code

    def to_dict(self) -> Dict[str, Any]:
        return {'code': self.code}


class FixerDefinition:
    def __init__(self, summary: str, code_samples: Optional[List[CodeSample]] = None,
                 description: str = ''):
        self.summary = summary
        self.code_samples = code_samples or []
        self.description = description

    def to_dict(self) -> Dict[str, Any]:
        result_dict = {
            'summary': self.summary,
            'code_samples': [sample.to_dict() for sample in self.code_samples]
        }
        if self.description:
            result_dict['description'] = self.description
        return result_dict
