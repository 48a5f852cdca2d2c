"""
XML export 파서: 문서 → NodeGraph (Project 루트).

규칙:
- 잘못된 XML, project 루트 누락, 필수 요소 누락 → ParseError (enrichment 전에 중단)
- 시나리오/액션워드/파라미터/스텝/인자 선언 순서 보존
- 미선언 액션워드 호출은 기본적으로 허용 (라이브러리 액션워드) → 바인딩 pass에서 경고
  strict_references=True 이면 ParseError
"""

import logging
import xml.etree.ElementTree as ET

from scenario_publisher.core.reporter import Reporter
from scenario_publisher.domain.constants import STEP_ACTION
from scenario_publisher.domain.errors import ErrorCodes, ParseError
from scenario_publisher.domain.nodes import (
    ActionWord,
    Argument,
    Call,
    Dataset,
    NodeGraph,
    Parameter,
    Project,
    Scenario,
    Step,
    Value,
    ValueKind,
)

logger = logging.getLogger(__name__)

LITERAL_TAGS = {
    "stringliteral": ValueKind.STRING,
    "numericliteral": ValueKind.NUMERIC,
    "booleanliteral": ValueKind.BOOLEAN,
    "nullliteral": ValueKind.NULL,
}


class XMLParser:
    """
    테스트 설계 XML export 파서.

    Usage:
        parser = XMLParser(xml_text, reporter)
        graph = parser.build_project()
    """

    def __init__(
        self,
        xml_text: str,
        reporter: Reporter | None = None,
        strict_references: bool = False,
    ):
        self.xml_text = xml_text
        self.reporter = reporter or Reporter()
        self.strict_references = strict_references
        self.graph = NodeGraph()

    def build_project(self) -> NodeGraph:
        """
        문서를 파싱해 NodeGraph 생성.

        Returns:
            Project 루트를 가진 NodeGraph

        Raises:
            ParseError: PARSE_ERROR_XML / PARSE_ERROR_STRUCTURE / PARSE_ERROR_REFERENCE
        """
        try:
            return self._build()
        except ParseError as e:
            self.reporter.dump_error(e)
            raise

    def _build(self) -> NodeGraph:
        try:
            root = ET.fromstring(self.xml_text)
        except ET.ParseError as e:
            raise ParseError(ErrorCodes.PARSE_ERROR_XML, reason=str(e)) from e

        if root.tag != "project":
            raise ParseError(
                ErrorCodes.PARSE_ERROR_STRUCTURE,
                expected="project",
                actual=root.tag,
            )

        project = self.graph.add(Project(
            name=_required_text(root, "name", "project"),
            description=_text(root, "description"),
        ))
        self.graph.root = project.handle

        for element in root.findall("scenarios/scenario"):
            project.scenarios.append(self._parse_scenario(element).handle)

        for element in root.findall("actionwords/actionword"):
            project.actionwords.append(self._parse_actionword(element).handle)

        if self.strict_references:
            self._check_references()

        logger.info(
            f"Extracted project {project.name!r}: "
            f"{len(project.scenarios)} scenario(s), {len(project.actionwords)} action word(s)"
        )
        return self.graph

    # -------------------------------------------------------------------------
    # Owners
    # -------------------------------------------------------------------------

    def _parse_scenario(self, element: ET.Element) -> Scenario:
        scenario = self.graph.add(Scenario(
            name=_required_text(element, "name", "scenario"),
            uid=_text(element, "uid") or None,
            description=_text(element, "description"),
            tags=_parse_tags(element),
        ))
        scenario.parameters = self._parse_parameters(element)
        scenario.steps = self._parse_steps(element)
        scenario.datasets = [
            _parse_dataset(dataset) for dataset in element.findall("datatable/dataset")
        ]
        return scenario

    def _parse_actionword(self, element: ET.Element) -> ActionWord:
        actionword = self.graph.add(ActionWord(
            name=_required_text(element, "name", "actionword"),
            uid=_text(element, "uid") or None,
            description=_text(element, "description"),
            tags=_parse_tags(element),
        ))
        actionword.parameters = self._parse_parameters(element)
        actionword.steps = self._parse_steps(element)
        return actionword

    def _parse_parameters(self, element: ET.Element) -> list[int]:
        handles = []
        for param in element.findall("parameters/parameter"):
            default = param.find("default")
            parameter = self.graph.add(Parameter(
                name=_required_text(param, "name", "parameter"),
                declared_type=_text(param, "type") or None,
                default=None if default is None else _value_of(default, "default"),
            ))
            handles.append(parameter.handle)
        return handles

    # -------------------------------------------------------------------------
    # Steps
    # -------------------------------------------------------------------------

    def _parse_steps(self, element: ET.Element) -> list[int]:
        steps = element.find("steps")
        if steps is None:
            return []

        handles = []
        for child in steps:
            if child.tag == "call":
                handles.append(self._parse_call(child).handle)
            elif child.tag == "action":
                handles.append(self._parse_action(child).handle)
            else:
                raise ParseError(
                    ErrorCodes.PARSE_ERROR_STRUCTURE,
                    element=child.tag,
                    reason="unknown step element",
                )
        return handles

    def _parse_call(self, element: ET.Element) -> Call:
        annotation = _text(element, "annotation").lower() or None
        call = self.graph.add(Call(
            actionword=_required_text(element, "actionword", "call"),
            annotation=annotation,
        ))
        for arg in element.findall("arguments/argument"):
            value = arg.find("value")
            if value is None:
                raise ParseError(
                    ErrorCodes.PARSE_ERROR_STRUCTURE,
                    element="argument",
                    missing="value",
                    call=call.actionword,
                )
            argument = self.graph.add(Argument(
                name=_text(arg, "name") or None,
                value=_value_of(value, "argument"),
            ))
            call.arguments.append(argument.handle)
        return call

    def _parse_action(self, element: ET.Element) -> Step:
        value = element.find("value")
        return self.graph.add(Step(
            key=(_text(element, "key") or STEP_ACTION).lower(),
            value=Value.string("") if value is None else _value_of(value, "action"),
        ))

    def _check_references(self) -> None:
        known = {actionword.name for actionword in self.graph.actionwords()}
        for call in self.graph.calls():
            if call.actionword not in known:
                raise ParseError(
                    ErrorCodes.PARSE_ERROR_REFERENCE,
                    node=call.handle,
                    actionword=call.actionword,
                )


def parse_project(
    xml_text: str,
    reporter: Reporter | None = None,
    strict_references: bool = False,
) -> NodeGraph:
    """XMLParser 편의 함수."""
    return XMLParser(xml_text, reporter, strict_references).build_project()


# =============================================================================
# Element helpers
# =============================================================================

def _text(element: ET.Element, tag: str, default: str = "") -> str:
    child = element.find(tag)
    if child is None or child.text is None:
        return default
    return child.text.strip()


def _required_text(element: ET.Element, tag: str, owner: str) -> str:
    value = _text(element, tag)
    if not value:
        raise ParseError(ErrorCodes.PARSE_ERROR_STRUCTURE, element=owner, missing=tag)
    return value


def _parse_tags(element: ET.Element) -> list[str]:
    tags = []
    for tag in element.findall("tags/tag"):
        key = _required_text(tag, "key", "tag")
        value = _text(tag, "value")
        tags.append(f"{key}:{value}" if value else key)
    return tags


def _parse_dataset(element: ET.Element) -> Dataset:
    arguments = []
    for arg in element.findall("arguments/argument"):
        value = arg.find("value")
        if value is None:
            raise ParseError(ErrorCodes.PARSE_ERROR_STRUCTURE, element="dataset", missing="value")
        arguments.append((_required_text(arg, "name", "dataset argument"), _value_of(value, "dataset")))
    return Dataset(name=_text(element, "name"), arguments=tuple(arguments))


def _value_of(container: ET.Element, owner: str) -> Value:
    """<value>/<default> 같은 컨테이너의 유일한 자식 값을 파싱."""
    children = list(container)
    if len(children) != 1:
        raise ParseError(
            ErrorCodes.PARSE_ERROR_STRUCTURE,
            element=owner,
            reason=f"expected exactly one value element, got {len(children)}",
        )
    return _parse_value(children[0])


def _parse_value(element: ET.Element) -> Value:
    if element.tag in LITERAL_TAGS:
        kind = LITERAL_TAGS[element.tag]
        text = element.text or ""
        if kind is ValueKind.STRING:
            return Value(kind, text)
        if kind is ValueKind.NULL:
            return Value(kind)
        text = text.strip()
        if kind is ValueKind.BOOLEAN and text.lower() not in ("true", "false"):
            raise ParseError(ErrorCodes.PARSE_ERROR_STRUCTURE, element=element.tag, value=text)
        if kind is ValueKind.NUMERIC and not text:
            raise ParseError(ErrorCodes.PARSE_ERROR_STRUCTURE, element=element.tag, missing="text")
        return Value(kind, text)

    if element.tag == "variable":
        return Value.variable(_required_text(element, "name", "variable"))

    if element.tag == "template":
        parts = []
        for child in element:
            if child.tag not in ("stringliteral", "variable"):
                raise ParseError(
                    ErrorCodes.PARSE_ERROR_STRUCTURE,
                    element=child.tag,
                    reason="unsupported template part",
                )
            parts.append(_parse_value(child))
        return Value(ValueKind.TEMPLATE, parts=tuple(parts))

    raise ParseError(
        ErrorCodes.PARSE_ERROR_STRUCTURE,
        element=element.tag,
        reason="unknown value element",
    )
