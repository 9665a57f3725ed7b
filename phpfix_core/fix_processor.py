"""
FixProcessor - runs fixers over source strings, files and directory trees.
"""

from pathlib import Path
from typing import Iterable, List, Optional

import git

from .fixers.fixer_factory import FixerFactory
from .result import FileResult, Result, ResultStatus
from .tokenizer.tokens import Tokens
from .whitespaces_config import ConfigStore, WhitespacesConfig
from . import logger


SOURCE_PATTERN = '*.php'
EXCLUDED_DIRS = {'vendor', '.git'}


class FixProcessor:
    """
    Applies a list of fixers, in order, to PHP source.

    All fixers share one token buffer per file, and a file is written back
    only when its text actually changed.
    """

    def __init__(self, fixer_ids: Optional[List[str]] = None,
                 whitespaces: Optional[WhitespacesConfig] = None):
        if whitespaces is None or fixer_ids is None:
            config = ConfigStore()
            whitespaces = whitespaces or config.whitespaces
            fixer_ids = fixer_ids if fixer_ids is not None else config.fixer_ids

        self.whitespaces = whitespaces
        if fixer_ids is None:
            self.fixers = FixerFactory.create_all(whitespaces)
        else:
            self.fixers = [FixerFactory.from_id(fixer_id, whitespaces) for fixer_id in fixer_ids]
        logger.info(f"FixProcessor initialized with fixers {[f.get_id() for f in self.fixers]}")

    def fix_code(self, code: str, file_path: Path = Path('stdin.php')) -> str:
        tokens = Tokens.from_code(code)
        for fixer in self.fixers:
            if fixer.supports(file_path):
                fixer.fix(file_path, tokens)
        return tokens.generate_code()

    def fix_file(self, file_path: Path, dry_run: bool = False) -> FileResult:
        file_path = Path(file_path)
        if not any(fixer.supports(file_path) for fixer in self.fixers):
            return FileResult(str(file_path), changed=False)

        try:
            # newline='' keeps \r\n line endings intact
            with open(file_path, 'r', encoding='utf-8', newline='') as f:
                original = f.read()

            fixed = self.fix_code(original, file_path)
            changed = fixed != original

            if changed and not dry_run:
                with open(file_path, 'w', encoding='utf-8', newline='') as f:
                    f.write(fixed)
        except (OSError, UnicodeError, RuntimeError) as e:
            logger.exception(f"Failed to fix {file_path}: {e}")
            return FileResult(str(file_path), changed=False, error=str(e))

        if changed:
            logger.info(f"{'Would fix' if dry_run else 'Fixed'} {file_path}")
        return FileResult(str(file_path), changed=changed)

    def collect_files(self, path: Path) -> List[Path]:
        """
        PHP files under path.

        Inside a git work tree only tracked and untracked-but-not-ignored files
        are returned, so vendored and generated code listed in .gitignore is
        never touched. Outside git, vendor/ directories are skipped.
        """
        path = Path(path)
        if path.is_file():
            return [path]
        if not path.is_dir():
            raise FileNotFoundError(f"No such file or directory: {path}")

        files = self._collect_git_files(path)
        if files is not None:
            return files

        return sorted(
            p for p in path.rglob(SOURCE_PATTERN)
            if p.is_file() and not EXCLUDED_DIRS.intersection(p.relative_to(path).parts)
        )

    @staticmethod
    def _collect_git_files(path: Path) -> Optional[List[Path]]:
        try:
            repo = git.Repo(path, search_parent_directories=True)
        except (git.InvalidGitRepositoryError, git.NoSuchPathError):
            return None
        if repo.working_tree_dir is None:
            return None

        try:
            output = repo.git.ls_files(
                '-z', '--cached', '--others', '--exclude-standard', '--', str(path.resolve())
            )
        except git.GitCommandError as e:
            logger.warning(f"git ls-files failed in {repo.working_tree_dir}, falling back to glob: {e}")
            return None

        root = Path(repo.working_tree_dir)
        files = {root / name for name in output.split('\0') if name}
        return sorted(f for f in files if f.suffix.lower() == '.php' and f.is_file())

    def fix_paths(self, paths: Iterable[Path], dry_run: bool = False) -> Result:
        file_results: List[FileResult] = []
        for path in paths:
            try:
                files = self.collect_files(Path(path))
            except FileNotFoundError as e:
                logger.error(str(e))
                file_results.append(FileResult(str(path), changed=False, error=str(e)))
                continue

            for file_path in files:
                file_results.append(self.fix_file(file_path, dry_run=dry_run))

        failed = [fr for fr in file_results if not fr.ok]
        changed = [fr for fr in file_results if fr.changed]

        if not file_results:
            return Result(ResultStatus.SUCCESS, 'No PHP files found', file_results=file_results)
        if not failed:
            status = ResultStatus.SUCCESS
        elif len(failed) == len(file_results):
            status = ResultStatus.FAILED
        else:
            status = ResultStatus.PARTIAL

        verb = 'need fixing' if dry_run else 'fixed'
        message = f"{len(changed)} of {len(file_results)} files {verb}"
        if failed:
            message += f", {len(failed)} failed"
        logger.info(message)
        return Result(status, message, file_results=file_results)
