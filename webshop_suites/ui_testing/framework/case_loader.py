"""
================================================================================
UI Case Loader Module
================================================================================

Loads declarative UI test cases from YAML files.

A case names a page, an ordered list of steps (page actions) and a list of
expectations over the page's elements:

    cases:
      - name: login_rejects_email_without_at
        page: login
        tags: [P1, regression]
        steps:
          - action: navigate
          - action: login
            params: {email: "correoInvalido.com", password: "TestPassword123"}
        expect:
          - {type: visible, element: email_error}
          - {type: text_equals, element: email_error, expected: "Please enter a valid email address."}

Key Features:
- ${var} interpolation from global and per-case variables
- Validation against the page registry (page, action and element names)
- Definition errors raise instead of silently dropping cases

================================================================================
"""

from __future__ import annotations

import re
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Union

import yaml
from loguru import logger

from .expectations import ELEMENT_KINDS, POSITIVE_KINDS, Expectation, ExpectationKind


class CaseDefinitionError(ValueError):
    """Raised when a YAML case is malformed or references unknown names."""
    pass


# ================================================================================
# Data Models
# ================================================================================

@dataclass(frozen=True)
class CaseStep:
    """One page action in a case."""
    action: str
    params: Dict[str, Any] = field(default_factory=dict)
    page: str = ""

    def describe(self) -> str:
        return f"{self.page}.{self.action}" if self.page else self.action


@dataclass
class UICase:
    """Complete UI case definition."""
    name: str
    page: str
    steps: List[CaseStep]
    expectations: List[Expectation] = field(default_factory=list)
    description: str = ""
    tags: List[str] = field(default_factory=list)
    severity: str = "normal"
    source: str = ""


def default_case_variables() -> Dict[str, Any]:
    """Variables available to every case file."""
    return {"timestamp": int(time.time() * 1000)}


# ================================================================================
# Case Loader
# ================================================================================

class CaseLoader:
    """
    Loads and validates UI cases from YAML files.

    Example:
        loader = CaseLoader(CASES_DIR, pages=PAGES)
        loader.set_global_variables(default_case_variables())
        for case in loader.load_all():
            print(case.name)
    """

    VARIABLE_PATTERN = re.compile(r'\$\{([^}]+)\}')

    def __init__(self, cases_directory: Union[str, Path], pages: Mapping[str, type]):
        """
        Args:
            cases_directory: Directory containing YAML case files
            pages: Page name -> page object class
        """
        self.cases_dir = Path(cases_directory)
        self.pages = dict(pages)
        self.global_variables: Dict[str, Any] = {}

    def set_global_variables(self, variables: Mapping[str, Any]) -> None:
        self.global_variables.update(variables)

    def load_file(self, file_path: Union[str, Path]) -> List[UICase]:
        """
        Load cases from a single YAML file.

        Raises:
            CaseDefinitionError: On invalid YAML or an invalid case.
        """
        file_path = Path(file_path)
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                content = yaml.safe_load(f)
        except FileNotFoundError:
            raise CaseDefinitionError(f"Case file not found: {file_path}") from None
        except yaml.YAMLError as e:
            raise CaseDefinitionError(f"YAML parsing error in {file_path}: {e}") from e

        if not content:
            logger.warning(f"Empty YAML file: {file_path}")
            return []

        cases_data = content.get('cases') if isinstance(content, dict) else None
        if not isinstance(cases_data, list):
            raise CaseDefinitionError(f"{file_path.name}: top-level 'cases' list expected")

        cases = [self._parse_case(data, file_path) for data in cases_data]

        names = [case.name for case in cases]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise CaseDefinitionError(f"{file_path.name}: duplicate case names {duplicates}")

        logger.info(f"Loaded {len(cases)} UI cases from {file_path.name}")
        return cases

    def load_all(self, pattern: str = "*.yaml") -> List[UICase]:
        """Load every case file in the directory, sorted by file name."""
        if not self.cases_dir.exists():
            raise CaseDefinitionError(f"Cases directory not found: {self.cases_dir}")

        all_cases: List[UICase] = []
        for file_path in sorted(self.cases_dir.glob(pattern)):
            all_cases.extend(self.load_file(file_path))

        logger.info(f"Total loaded UI cases: {len(all_cases)}")
        return all_cases

    def load_by_tags(self, tags: List[str]) -> List[UICase]:
        """Cases carrying any of the given tags."""
        return [
            case for case in self.load_all()
            if any(tag in case.tags for tag in tags)
        ]

    # ----------------------------------------------------------------------------
    # Parsing
    # ----------------------------------------------------------------------------

    def _parse_case(self, data: Any, source_file: Path) -> UICase:
        if not isinstance(data, dict):
            raise CaseDefinitionError(f"{source_file.name}: case entries must be mappings")

        name = data.get('name')
        if not name:
            raise CaseDefinitionError(f"{source_file.name}: case without a name")
        where = f"{source_file.name}:{name}"

        page = data.get('page')
        self._page_class(page, where)

        case_variables = data.get('variables') or {}
        if not isinstance(case_variables, dict):
            raise CaseDefinitionError(f"{where}: 'variables' must be a mapping")
        variables = {**self.global_variables, **case_variables}

        raw_steps = data.get('steps') or []
        if not isinstance(raw_steps, list):
            raise CaseDefinitionError(f"{where}: 'steps' must be a list")
        if not raw_steps:
            raise CaseDefinitionError(f"{where}: at least one step is required")
        steps = [self._parse_step(step, page, variables, where) for step in raw_steps]

        expectations = [
            self._parse_expectation(item, page, variables, where)
            for item in data.get('expect') or []
        ]
        if not expectations:
            raise CaseDefinitionError(f"{where}: at least one expectation is required")
        # Negative checks pass on the first poll, before the result page renders
        if expectations[0].kind not in POSITIVE_KINDS:
            raise CaseDefinitionError(
                f"{where}: the first expectation must be visible or text_*, got '{expectations[0].kind.value}'"
            )

        return UICase(
            name=name,
            page=page,
            steps=steps,
            expectations=expectations,
            description=data.get('description', ''),
            tags=list(data.get('tags', [])),
            severity=data.get('severity', 'normal'),
            source=source_file.name,
        )

    def _parse_step(self, data: Any, case_page: str, variables: Dict[str, Any], where: str) -> CaseStep:
        if isinstance(data, str):
            data = {'action': data}
        if not isinstance(data, dict):
            raise CaseDefinitionError(f"{where}: steps must be action names or mappings, got {data!r}")
        action = data.get('action')
        page = data.get('page', '')
        page_cls = self._page_class(page or case_page, where)
        if action not in page_cls.ACTIONS:
            raise CaseDefinitionError(
                f"{where}: page '{page or case_page}' has no action '{action}'"
            )
        params = data.get('params') or {}
        if not isinstance(params, dict):
            raise CaseDefinitionError(f"{where}: params of '{action}' must be a mapping")
        params = self._interpolate(params, variables, where)
        return CaseStep(action=action, params=params, page=page)

    def _parse_expectation(self, data: Any, case_page: str, variables: Dict[str, Any], where: str) -> Expectation:
        if not isinstance(data, dict):
            raise CaseDefinitionError(f"{where}: expectations must be mappings")
        try:
            kind = ExpectationKind(data.get('type'))
        except ValueError:
            raise CaseDefinitionError(
                f"{where}: unknown expectation type {data.get('type')!r}"
            ) from None

        page = data.get('page', '')
        element = data.get('element', '')
        expected = self._interpolate(str(data.get('expected', '')), variables, where)

        if kind in ELEMENT_KINDS:
            page_cls = self._page_class(page or case_page, where)
            if element not in page_cls.ELEMENTS:
                raise CaseDefinitionError(
                    f"{where}: page '{page or case_page}' has no element '{element}'"
                )
        if kind in (ExpectationKind.TEXT_EQUALS, ExpectationKind.TEXT_CONTAINS, ExpectationKind.URL_EXCLUDES) \
                and not expected:
            raise CaseDefinitionError(f"{where}: '{kind.value}' needs an expected value")

        return Expectation(kind=kind, element=element, expected=expected, page=page)

    def _page_class(self, page: Any, where: str) -> type:
        try:
            return self.pages[page]
        except (KeyError, TypeError):
            raise CaseDefinitionError(f"{where}: unknown page {page!r}") from None

    # ----------------------------------------------------------------------------
    # Interpolation
    # ----------------------------------------------------------------------------

    def _interpolate(self, data: Any, variables: Dict[str, Any], where: str) -> Any:
        """Recursively interpolate ${var} placeholders."""
        if isinstance(data, str):
            return self._interpolate_string(data, variables, where)
        elif isinstance(data, dict):
            return {k: self._interpolate(v, variables, where) for k, v in data.items()}
        elif isinstance(data, list):
            return [self._interpolate(item, variables, where) for item in data]
        else:
            return data

    def _interpolate_string(self, text: str, variables: Dict[str, Any], where: str) -> str:
        def replace_var(match):
            var_name = match.group(1)
            if var_name not in variables:
                raise CaseDefinitionError(f"{where}: undefined variable '{var_name}'")
            return str(variables[var_name])

        return self.VARIABLE_PATTERN.sub(replace_var, text)


__all__ = [
    "CaseDefinitionError",
    "CaseLoader",
    "CaseStep",
    "UICase",
    "default_case_variables",
]
