"""Heuristic pattern registries and the constant tables the scanners consume.

Registries map a human-readable label to a compiled regular expression plus
optional severity/category metadata. They are built once at import time and
only ever read afterwards, so concurrent runs may share them freely. Callers
that want different heuristics build their own registry with
:func:`build_registry` and pass it to the scanners.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Iterable, Iterator, Mapping, Optional, Sequence, Tuple


class PatternError(ValueError):
    """Raised when a registry pattern cannot be compiled."""


@dataclass(frozen=True)
class PatternRule:
    """A labelled regular expression with optional metadata."""

    label: str
    pattern: re.Pattern[str]
    severity: Optional[str] = None
    category: Optional[str] = None
    accept: Optional[Callable[[re.Match[str]], bool]] = None

    def search(self, text: str) -> bool:
        if self.accept is None:
            return self.pattern.search(text) is not None
        return any(self.accept(match) for match in self.pattern.finditer(text))

    def count(self, text: str) -> int:
        """Number of non-overlapping matches that pass ``accept``."""
        matches = self.pattern.finditer(text)
        if self.accept is None:
            return sum(1 for _ in matches)
        return sum(1 for match in matches if self.accept(match))


RuleSpec = Tuple[str, str, int, Optional[str], Optional[str]]

LONG_BLOCK_MIN_BODY = 2000


class Registry(Mapping[str, PatternRule]):
    """Ordered, read-only mapping of label -> rule."""

    def __init__(self, rules: Iterable[PatternRule]) -> None:
        ordered = {}
        for rule in rules:
            if rule.label in ordered:
                raise PatternError(f"Duplicate registry label: {rule.label}")
            ordered[rule.label] = rule
        self._rules = MappingProxyType(ordered)

    def __getitem__(self, label: str) -> PatternRule:
        return self._rules[label]

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def rules(self) -> Tuple[PatternRule, ...]:
        return tuple(self._rules.values())

    def by_category(self, category: str) -> Tuple[PatternRule, ...]:
        return tuple(rule for rule in self._rules.values() if rule.category == category)

    def __repr__(self) -> str:
        return f"Registry({list(self._rules)!r})"


def build_registry(
    specs: Sequence[RuleSpec],
    *,
    base_flags: int = re.ASCII,
    accept: Mapping[str, Callable[[re.Match[str]], bool]] | None = None,
) -> Registry:
    """Compile ``(label, regex, flags, severity, category)`` specs into a registry.

    ``base_flags`` is OR-ed into every rule; the default keeps ``\\d``, ``\\w``
    and ``\\b`` ASCII-only. ``accept`` attaches a match filter to a label.
    """
    accept = accept or {}
    rules = []
    for label, regex, flags, severity, category in specs:
        try:
            compiled = re.compile(regex, flags | base_flags)
        except re.error as exc:
            raise PatternError(f"Invalid pattern for '{label}': {exc}") from exc
        rules.append(
            PatternRule(
                label=label,
                pattern=compiled,
                severity=severity,
                category=category,
                accept=accept.get(label),
            )
        )
    unknown = set(accept) - {rule.label for rule in rules}
    if unknown:
        raise PatternError(f"Match filters for unknown labels: {sorted(unknown)}")
    return Registry(rules)


def _is_long_block(match: re.Match[str]) -> bool:
    text = match.group()
    return text.endswith("}") and len(text) - 2 >= LONG_BLOCK_MIN_BODY


SECURITY_RULES = build_registry(
    (
        ("API Key", r"(AIza|sk-proj-|sk-|AKIA)[a-zA-Z0-9_\-]{20,}", 0, "HIGH", "secret"),
        (
            "AWS Secret",
            r"aws_secret_access_key\s*=\s*['\"]?[A-Za-z0-9/+=]{40}['\"]?",
            0,
            "HIGH",
            "secret",
        ),
        ("Private Key", r"-----BEGIN (RSA |EC |DSA )?PRIVATE KEY-----", 0, "HIGH", "secret"),
        (
            "Password in Code",
            r"(password|passwd|pwd)\s*=\s*['\"][^'\"]{3,}['\"]",
            re.IGNORECASE,
            "HIGH",
            "credential",
        ),
        ("JWT Token", r"eyJ[A-Za-z0-9_-]*\.eyJ[A-Za-z0-9_-]*\.[A-Za-z0-9_-]*", 0, "HIGH", "credential"),
        (
            "Database Connection",
            r"(mongodb|mysql|postgresql)://[^\s]+",
            re.IGNORECASE,
            "HIGH",
            "credential",
        ),
        ("Hardcoded IP", r"\b(?:[0-9]{1,3}\.){3}[0-9]{1,3}\b", 0, "HIGH", "network"),
    )
)

# Long Function: one match per `}`-free run, from its first `{` through the
# closing `}`; counted when the body holds at least LONG_BLOCK_MIN_BODY
# characters. Same count as `\{[^}]{2000,}\}` in a single left-to-right pass.
SMELL_RULES = build_registry(
    (
        ("Long Function", r"\{[^}]*+\}?", 0, None, "size"),
        ("Magic Numbers", r"\b(\d{3,})\b", 0, None, "readability"),
        # One hit per `}`-free run holding at least five `{`.
        ("Deep Nesting", r"\{(?:[^{}]*+\{){4}[^}]*+", 0, None, "complexity"),
        ("TODO Comments", r"(TODO|FIXME|HACK|XXX)", re.IGNORECASE, None, "maintenance"),
    ),
    accept={"Long Function": _is_long_block},
)

README_SECTION_RULES = build_registry(
    (
        ("Title/Description", r"#\s+\w+", re.IGNORECASE, None, "readme"),
        ("Installation", r"install", re.IGNORECASE, None, "readme"),
        ("Usage", r"usage|example", re.IGNORECASE, None, "readme"),
        ("Contributing", r"contribut", re.IGNORECASE, None, "readme"),
        ("License", r"license", re.IGNORECASE, None, "readme"),
        ("Dependencies", r"depend|requirement", re.IGNORECASE, None, "readme"),
    )
)

TEST_FILENAME_RULES = build_registry(
    (
        ("test_prefix", r"test_.*\.(py|js|cpp|java)", 0, None, "test"),
        ("test_suffix", r".*_test\.(py|js|cpp|java)", 0, None, "test"),
        ("dot_test", r".*\.test\.(js|ts)", 0, None, "test"),
        ("dot_spec", r".*\.spec\.(js|ts)", 0, None, "test"),
    )
)

FUNCTION = "function"
CLASS = "class"

STRUCTURE_RULES = build_registry(
    (
        ("def_keyword", r"\bdef\s+\w+", 0, None, FUNCTION),
        ("brace_signature", r"\w+\s+\w+\s*\([^)]*\)\s*\{", 0, None, FUNCTION),
        ("class_keyword", r"\bclass\s+\w+", 0, None, CLASS),
        ("struct_keyword", r"\bstruct\s+\w+", 0, None, CLASS),
    )
)

COMMENT_MARKERS: Tuple[str, ...] = ("//", "#", "/*")

DEFAULT_MANIFESTS: Mapping[str, str] = MappingProxyType(
    {
        "npm": "package.json",
        "pip": "requirements.txt",
        "cargo": "Cargo.toml",
        "maven": "pom.xml",
        "gradle": "build.gradle",
    }
)

DEFAULT_SOURCE_EXTENSIONS: frozenset[str] = frozenset({".py", ".js", ".cpp", ".java", ".ts"})

DEFAULT_README_CANDIDATES: Tuple[str, ...] = ("README.md", "README.MD", "readme.md", "README.txt")


__all__ = [
    "CLASS",
    "COMMENT_MARKERS",
    "DEFAULT_MANIFESTS",
    "DEFAULT_README_CANDIDATES",
    "DEFAULT_SOURCE_EXTENSIONS",
    "FUNCTION",
    "PatternError",
    "PatternRule",
    "README_SECTION_RULES",
    "Registry",
    "SECURITY_RULES",
    "SMELL_RULES",
    "STRUCTURE_RULES",
    "TEST_FILENAME_RULES",
    "build_registry",
]
