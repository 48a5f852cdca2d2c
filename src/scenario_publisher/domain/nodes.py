"""
Node graph: 파싱된 프로젝트의 메모리 표현.

규칙:
- 노드 종류는 닫힌 집합: Project, Scenario, ActionWord, Parameter, Call, Argument, Step
- 모든 노드는 NodeGraph(arena)에 저장되고 정수 handle로 참조
- parent도 handle로 저장 (소유 순환 없음, 상향 탐색 O(1))
- 노드 자체에는 동작 없음 → pass 함수들이 graph를 명시적으로 받아서 변경
"""

import json
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, TypeVar

from scenario_publisher.domain.errors import ErrorCodes, GraphInvariantError

# =============================================================================
# Values
# =============================================================================

class ValueKind(str, Enum):
    """인자/기본값/스텝에 들어가는 값의 종류."""
    STRING = "string"
    NUMERIC = "numeric"
    BOOLEAN = "boolean"
    NULL = "null"
    VARIABLE = "variable"    # 호출자 파라미터 참조
    TEMPLATE = "template"    # string + variable 조합


@dataclass(frozen=True)
class Value:
    """불변 리터럴/표현식."""
    kind: ValueKind
    text: str = ""
    parts: tuple["Value", ...] = ()

    @classmethod
    def string(cls, text: str) -> "Value":
        return cls(ValueKind.STRING, text)

    @classmethod
    def variable(cls, name: str) -> "Value":
        return cls(ValueKind.VARIABLE, name)

    def canonical(self) -> Any:
        """해시용 JSON-safe 구조."""
        if self.kind is ValueKind.TEMPLATE:
            return {"template": [part.canonical() for part in self.parts]}
        return {self.kind.value: self.text}

    def to_source(self) -> str:
        """
        정규 텍스트 표현.

        string/template → JSON 따옴표 문자열, variable → 이름,
        numeric → 원문, boolean → 소문자, null → "null"
        """
        if self.kind is ValueKind.STRING:
            return json.dumps(self.text, ensure_ascii=False)
        if self.kind is ValueKind.TEMPLATE:
            return json.dumps(self._template_text(), ensure_ascii=False)
        if self.kind is ValueKind.BOOLEAN:
            return self.text.lower()
        if self.kind is ValueKind.NULL:
            return "null"
        return self.text

    def display(self) -> str:
        """Gherkin 문장에 넣을 때의 표현 (따옴표 없음)."""
        if self.kind is ValueKind.STRING:
            return self.text
        if self.kind is ValueKind.TEMPLATE:
            return self._template_text()
        if self.kind is ValueKind.VARIABLE:
            return f"<{self.text}>"
        return self.to_source()

    def _template_text(self) -> str:
        return "".join(
            part.text if part.kind is ValueKind.STRING else "${" + part.text + "}"
            for part in self.parts
        )


@dataclass(frozen=True)
class Dataset:
    """시나리오 datatable의 한 행."""
    name: str
    arguments: tuple[tuple[str, Value], ...] = ()


# =============================================================================
# Nodes
# =============================================================================

class NodeKind(str, Enum):
    PROJECT = "project"
    SCENARIO = "scenario"
    ACTIONWORD = "actionword"
    PARAMETER = "parameter"
    CALL = "call"
    ARGUMENT = "argument"
    STEP = "step"


@dataclass(eq=False)
class Node:
    """
    모든 노드 종류의 공통 기반.

    handle/parent는 NodeGraph가 관리한다 (생성자 인자 아님).
    """
    kind: ClassVar[NodeKind]

    handle: int = field(default=-1, init=False)
    parent: int | None = field(default=None, init=False)

    def child_handles(self) -> list[int]:
        """자식 handle 목록 (선언 순서)."""
        raise NotImplementedError(type(self).__name__)


@dataclass(eq=False)
class Project(Node):
    kind: ClassVar[NodeKind] = NodeKind.PROJECT

    name: str = ""
    description: str = ""
    scenarios: list[int] = field(default_factory=list)
    actionwords: list[int] = field(default_factory=list)

    def child_handles(self) -> list[int]:
        return [*self.scenarios, *self.actionwords]


@dataclass(eq=False)
class Scenario(Node):
    kind: ClassVar[NodeKind] = NodeKind.SCENARIO

    name: str = ""
    uid: str | None = None
    description: str = ""
    tags: list[str] = field(default_factory=list)
    parameters: list[int] = field(default_factory=list)
    steps: list[int] = field(default_factory=list)
    datasets: list[Dataset] = field(default_factory=list)

    def child_handles(self) -> list[int]:
        return [*self.parameters, *self.steps]


@dataclass(eq=False)
class ActionWord(Node):
    kind: ClassVar[NodeKind] = NodeKind.ACTIONWORD

    name: str = ""
    uid: str | None = None
    description: str = ""
    tags: list[str] = field(default_factory=list)
    parameters: list[int] = field(default_factory=list)
    steps: list[int] = field(default_factory=list)

    # === Enrichment (normalize_gherkin_steps) ===
    gherkin_annotations: list[str] = field(default_factory=list)
    gherkin_pattern: str | None = None

    def child_handles(self) -> list[int]:
        return [*self.parameters, *self.steps]


@dataclass(eq=False)
class Parameter(Node):
    kind: ClassVar[NodeKind] = NodeKind.PARAMETER

    name: str = ""
    declared_type: str | None = None
    default: Value | None = None

    # === Enrichment (add_parameter_types) ===
    type: str | None = None

    def child_handles(self) -> list[int]:
        return []


@dataclass(eq=False)
class Call(Node):
    kind: ClassVar[NodeKind] = NodeKind.CALL

    actionword: str = ""
    arguments: list[int] = field(default_factory=list)
    annotation: str | None = None

    # === Enrichment (bind_call_arguments / normalize_gherkin_steps) ===
    resolved: bool | None = None
    target: int | None = None
    ordered_arguments: list[int] = field(default_factory=list)
    real_annotation: str | None = None
    gherkin_text: str | None = None

    def child_handles(self) -> list[int]:
        return list(self.arguments)


@dataclass(eq=False)
class Argument(Node):
    kind: ClassVar[NodeKind] = NodeKind.ARGUMENT

    value: Value = field(default_factory=lambda: Value(ValueKind.NULL))
    name: str | None = None  # None → positional

    # === Enrichment (bind_call_arguments / add_default_arguments) ===
    parameter: int | None = None
    unresolved: bool = False
    synthesized: bool = False

    def child_handles(self) -> list[int]:
        return []


@dataclass(eq=False)
class Step(Node):
    kind: ClassVar[NodeKind] = NodeKind.STEP

    key: str = "action"  # action, result, 또는 Gherkin 키워드
    value: Value = field(default_factory=lambda: Value.string(""))

    # === Enrichment (normalize_gherkin_steps) ===
    annotation: str | None = None

    def child_handles(self) -> list[int]:
        return []


N = TypeVar("N", bound=Node)


# =============================================================================
# Arena
# =============================================================================

class NodeGraph:
    """
    노드 arena.

    Usage:
        graph = NodeGraph()
        project = graph.add(Project(name="demo"))
        graph.root = project.handle
    """

    def __init__(self) -> None:
        self._nodes: list[Node] = []
        self.root: int | None = None

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes)

    def add(self, node: N) -> N:
        """노드를 arena에 추가하고 handle을 발급."""
        node.handle = len(self._nodes)
        self._nodes.append(node)
        return node

    def replace(self, handle: int, node: N) -> N:
        """
        같은 handle 자리에 다른 노드를 넣는다.

        부모 참조는 유지되고, 새 노드의 자식들은 새 노드를 부모로 가리킨다.
        """
        old = self.node(handle)
        node.handle = handle
        node.parent = old.parent
        self._nodes[handle] = node
        for child in node.child_handles():
            self.node(child).parent = handle
        return node

    def node(self, handle: int) -> Node:
        if handle < 0 or handle >= len(self._nodes):
            raise GraphInvariantError(ErrorCodes.GRAPH_UNKNOWN_HANDLE, node=handle)
        return self._nodes[handle]

    def get(self, handle: int, cls: type[N]) -> N:
        """종류를 확인하며 노드 조회."""
        node = self.node(handle)
        if not isinstance(node, cls):
            raise GraphInvariantError(
                ErrorCodes.GRAPH_WRONG_KIND,
                node=handle,
                expected=cls.__name__,
                actual=type(node).__name__,
            )
        return node

    @property
    def project(self) -> Project:
        if self.root is None:
            raise GraphInvariantError(ErrorCodes.GRAPH_UNKNOWN_HANDLE, reason="graph has no root")
        return self.get(self.root, Project)

    def children(self, handle: int) -> list[Node]:
        return [self.node(child) for child in self.node(handle).child_handles()]

    def parent_of(self, handle: int) -> Node | None:
        parent = self.node(handle).parent
        return None if parent is None else self.node(parent)

    def enclosing(self, handle: int, cls: type[N]) -> N | None:
        """가장 가까운 cls 종류의 조상."""
        current = self.parent_of(handle)
        while current is not None:
            if isinstance(current, cls):
                return current
            current = self.parent_of(current.handle)
        return None

    def walk(self, handle: int | None = None) -> Iterator[Node]:
        """전위 순회 (문서 순서)."""
        start = self.root if handle is None else handle
        if start is None:
            return
        stack = [start]
        while stack:
            node = self.node(stack.pop())
            yield node
            stack.extend(reversed(node.child_handles()))

    # -------------------------------------------------------------------------
    # Shortcuts
    # -------------------------------------------------------------------------

    def scenarios(self) -> list[Scenario]:
        return [self.get(h, Scenario) for h in self.project.scenarios]

    def actionwords(self) -> list[ActionWord]:
        return [self.get(h, ActionWord) for h in self.project.actionwords]

    def actionword_index(self) -> dict[str, ActionWord]:
        """이름 → ActionWord. 중복 이름은 먼저 선언된 것 우선."""
        index: dict[str, ActionWord] = {}
        for actionword in self.actionwords():
            index.setdefault(actionword.name, actionword)
        return index

    def calls(self) -> list[Call]:
        return [node for node in self.walk() if isinstance(node, Call)]

    def parameters_of(self, owner: Scenario | ActionWord) -> list[Parameter]:
        return [self.get(h, Parameter) for h in owner.parameters]

    def arguments_of(self, call: Call) -> list[Argument]:
        return [self.get(h, Argument) for h in call.arguments]
