"""ProjectAnalyzer: discover, parse and measure every file of a project.

Files are independent, so each one runs through parse -> declaration
metrics -> file rollup on its own worker. A file that cannot be read or
parsed is recorded as skipped and the rest of the project still completes.

Usage:
    analyzer = ProjectAnalyzer(load_config(), get_parser("python"))
    stats = analyzer.analyze(Path("src"))
"""

from __future__ import annotations

import fnmatch
import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from threading import Lock

from ..config import AnalysisConfig
from ..exceptions import AnalysisError, FileAccessError, InvalidPathError
from ..identity import normalize_path
from ..rollup.builder import build_file_stats, build_project_stats
from ..rollup.models import FileStats, ProjectStats, SkippedFile
from ..syntax.base import SourceParser

logger = logging.getLogger(__name__)


class ProjectAnalyzer:
    """Runs the per-file pipeline over a directory tree.

    Attributes:
        analyzed_count: Files measured in the last run
        skipped_count: Files skipped in the last run
    """

    def __init__(self, config: AnalysisConfig, parser: SourceParser) -> None:
        self.config = config
        self.parser = parser
        self._lock = Lock()
        self.analyzed_count = 0
        self.skipped_count = 0

    def discover(self, root: Path) -> list[Path]:
        """Source files under ``root`` matching the include/exclude patterns."""
        if not root.exists():
            raise InvalidPathError(root, "does not exist")
        if not root.is_dir():
            raise InvalidPathError(root, "not a directory")

        files = []
        for path in sorted(root.rglob("*")):
            if path.is_symlink() and not self.config.follow_symlinks:
                continue
            if not path.is_file():
                continue
            rel = normalize_path(path, root)
            if not any(fnmatch.fnmatch(path.name, p) for p in self.config.include_patterns):
                continue
            if self._excluded(rel):
                continue
            files.append(path)

        logger.debug(f"Discovered {len(files)} files under {root}")
        return files

    def _excluded(self, rel: str) -> bool:
        for pattern in self.config.exclude_patterns:
            if fnmatch.fnmatch(rel, pattern):
                return True
            # "venv/*" also matches "pkg/venv/x.py"
            if fnmatch.fnmatch(rel, f"*/{pattern}"):
                return True
        return False

    def analyze_file(self, path: Path, root: Path) -> FileStats:
        """Parse and measure one file.

        Raises:
            FileAccessError: The file is too large or unreadable.
            ParsingError: The frontend rejected the source.
        """
        try:
            size = path.stat().st_size
        except OSError as e:
            raise FileAccessError(path, str(e))
        if size > self.config.max_file_size_bytes:
            raise FileAccessError(path, f"larger than {self.config.max_file_size_mb} MB")

        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise FileAccessError(path, str(e))

        started = time.perf_counter()
        parsed = self.parser.parse(source, path, root)
        stats = build_file_stats(
            parsed,
            root=root,
            project_id=self.config.project_id,
            thresholds=self.config.thresholds,
        )
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.debug(f"Analyzed {path} in {elapsed_ms:.1f} ms ({len(stats.declarations)} declarations)")
        return stats

    def _run_one(self, path: Path, root: Path) -> FileStats | SkippedFile:
        try:
            result: FileStats | SkippedFile = self.analyze_file(path, root)
        except AnalysisError as e:
            logger.warning(f"Skipping {path}: {e}")
            result = SkippedFile(path=normalize_path(path, root), reason=str(e))
        except RecursionError:
            # Tree walks recurse per node; a very long expression chain exceeds the stack
            reason = "expression nesting too deep to analyze"
            logger.warning(f"Skipping {path}: {reason}")
            result = SkippedFile(path=normalize_path(path, root), reason=reason)

        with self._lock:
            if isinstance(result, SkippedFile):
                self.skipped_count += 1
            else:
                self.analyzed_count += 1
        return result

    def analyze(self, root: Path) -> ProjectStats:
        """Analyze every discovered file and build the project rollup."""
        root = Path(root)
        paths = self.discover(root)
        self.analyzed_count = 0
        self.skipped_count = 0

        results: list[FileStats | SkippedFile] = []
        if len(paths) < self.config.parallel_min_files or self.config.effective_workers == 1:
            # Sequential for small batches (parallel overhead not worth it)
            for path in paths:
                results.append(self._run_one(path, root))
        else:
            with ThreadPoolExecutor(max_workers=self.config.effective_workers) as executor:
                futures = {executor.submit(self._run_one, p, root): p for p in paths}
                for future in as_completed(futures):
                    results.append(future.result())

        files = [r for r in results if isinstance(r, FileStats)]
        skipped = [r for r in results if isinstance(r, SkippedFile)]
        if skipped:
            logger.warning(f"Skipped {len(skipped)} of {len(paths)} files")

        return build_project_stats(
            files,
            name=self.config.project_name,
            project_id=self.config.project_id,
            root=root,
            skipped=skipped,
            thresholds=self.config.thresholds,
        )
