"""
File loader for parsing and validating ignore files
"""

import logging
from pathlib import Path
from typing import Iterable, List, Dict, Union
from dataclasses import dataclass, field

from .compiler import compile_line, ends_with_dangling_escape
from .constants import COMMENT_PREFIX, NEGATION_PREFIX, PATH_SEPARATOR
from .errors import IgnoreFileError, IgnorePatternError
from .utils import get_logger, log_with_context

logger = get_logger(__name__)


def is_pattern_line(line: str) -> bool:
    """A line is a rule unless it is empty, only spaces, or a comment"""
    if line == "" or line.startswith(COMMENT_PREFIX):
        return False
    return line.rstrip(" ") != ""


def filter_pattern_lines(lines: Iterable[str]) -> List[str]:
    """
    Keep rule lines in declaration order

    Lines are kept verbatim; trailing spaces are not trimmed.
    """
    return [line for line in lines if is_pattern_line(line)]


@dataclass
class ValidationWarning:
    """A rule that loads but will never match as written"""
    line: int
    pattern: str
    message: str


@dataclass
class IgnoreFileInfo:
    """Information about a loaded ignore file"""
    path: Path
    patterns: List[str]
    warnings: List[ValidationWarning] = field(default_factory=list)
    stats: Dict[str, int] = field(default_factory=dict)

    @property
    def has_warnings(self) -> bool:
        """Check if file has warnings"""
        return len(self.warnings) > 0


class IgnoreFileLoader:
    """
    Handles loading, parsing, and validating ignore files
    """

    def __init__(self, separator: str = PATH_SEPARATOR, encoding: str = "utf-8"):
        """
        Initialize loader

        Args:
            separator: Path separator the patterns are written with
            encoding: Text encoding of ignore files
        """
        self.separator = separator
        self.encoding = encoding

    def read_lines(self, file_path: Union[str, Path]) -> List[str]:
        """
        Read a file as newline-delimited lines without line terminators

        Raises:
            IgnoreFileError: The file cannot be opened or read
        """
        file_path = Path(file_path)
        try:
            # Undecodable bytes survive as surrogates, as os.fsdecode() does for paths
            with open(file_path, 'r', encoding=self.encoding, errors='surrogateescape') as f:
                return [line.rstrip('\n') for line in f]
        except OSError as e:
            raise IgnoreFileError(file_path, str(e)) from e

    def load_file(self, file_path: Union[str, Path]) -> IgnoreFileInfo:
        """
        Load and validate an ignore file

        Args:
            file_path: Path to the ignore file

        Returns:
            IgnoreFileInfo with patterns in file order and validation results

        Raises:
            IgnoreFileError: The file cannot be opened or read
        """
        file_path = Path(file_path)
        lines = self.read_lines(file_path)

        info = IgnoreFileInfo(
            path=file_path,
            patterns=[],
            stats={
                'total_lines': len(lines),
                'empty_lines': 0,
                'comment_lines': 0,
                'pattern_lines': 0,
            }
        )

        for line_num, line in enumerate(lines, 1):
            if line.startswith(COMMENT_PREFIX):
                info.stats['comment_lines'] += 1
                continue

            if not is_pattern_line(line):
                info.stats['empty_lines'] += 1
                continue

            info.stats['pattern_lines'] += 1
            info.patterns.append(line)

            for message in self.check_pattern(line):
                info.warnings.append(ValidationWarning(
                    line=line_num,
                    pattern=line,
                    message=message
                ))

        for warning in info.warnings:
            log_with_context(
                logger, logging.WARNING,
                f"{file_path}:{warning.line}: {warning.message} ({warning.pattern!r})",
                file=str(file_path), line=warning.line, pattern=warning.pattern,
            )

        logger.debug(
            f"Loaded {info.stats['pattern_lines']} patterns from {file_path} "
            f"({len(info.warnings)} warnings)"
        )
        return info

    def check_pattern(self, pattern: str) -> List[str]:
        """
        Check a rule for problems that make it ineffective

        Args:
            pattern: Rule line as declared, possibly starting with '!'

        Returns:
            List of warning messages
        """
        warnings = []
        body = pattern[len(NEGATION_PREFIX):] if pattern.startswith(NEGATION_PREFIX) else pattern

        try:
            compile_line(body, self.separator)
        except IgnorePatternError as e:
            warnings.append(f"Pattern does not compile and will never match: {e}")

        if ends_with_dangling_escape(body):
            warnings.append("Trailing backslash escapes nothing and is dropped")

        if body == "":
            warnings.append("Negation without a pattern only matches the empty path")

        return warnings
