"""
Pytest fixtures for the publisher tests.

구성:
- sample_xml: 시나리오 2개 + 액션워드 6개 (Gherkin, 기본값, datatable, 미선언 호출 포함)
- project_xml: 작은 문서를 바로 만드는 팩토리
"""

from collections.abc import Callable
from pathlib import Path

import pytest

from scenario_publisher.core.parser import parse_project
from scenario_publisher.core.reporter import Reporter
from scenario_publisher.domain.nodes import NodeGraph
from scenario_publisher.enrich import enrich_project

# =============================================================================
# Path Fixtures
# =============================================================================

@pytest.fixture
def project_root() -> Path:
    """프로젝트 루트 경로."""
    return Path(__file__).parent.parent


@pytest.fixture
def default_config_path(project_root: Path) -> Path:
    """default.yaml 경로."""
    return project_root / "default.yaml"


# =============================================================================
# Document Fixtures
# =============================================================================

SAMPLE_XML = """<?xml version="1.0" encoding="UTF-8"?>
<project>
  <name>Coffee machine</name>
  <description>Sample project</description>
  <scenarios>
    <scenario>
      <name>Simple use</name>
      <uid>sc-1</uid>
      <tags>
        <tag><key>smoke</key></tag>
        <tag><key>priority</key><value>high</value></tag>
      </tags>
      <steps>
        <call>
          <actionword>I start the coffee machine "lang"</actionword>
          <annotation>given</annotation>
          <arguments>
            <argument><name>lang</name><value><stringliteral>en</stringliteral></value></argument>
          </arguments>
        </call>
        <call><actionword>I take a coffee</actionword><annotation>when</annotation></call>
        <call><actionword>coffee should be served</actionword><annotation>then</annotation></call>
        <call><actionword>Greet</actionword><annotation>and</annotation></call>
      </steps>
    </scenario>
    <scenario>
      <name>Water level</name>
      <uid>sc-2</uid>
      <parameters>
        <parameter><name>count</name></parameter>
      </parameters>
      <steps>
        <call>
          <actionword>I take "count" coffees</actionword>
          <arguments>
            <argument><value><variable><name>count</name></variable></value></argument>
          </arguments>
        </call>
        <action>
          <key>then</key>
          <value><stringliteral>message "Fill tank" should be displayed</stringliteral></value>
        </action>
        <call><actionword>Library step</actionword></call>
      </steps>
      <datatable>
        <dataset>
          <name>few</name>
          <arguments>
            <argument><name>count</name><value><numericliteral>3</numericliteral></value></argument>
          </arguments>
        </dataset>
      </datatable>
    </scenario>
  </scenarios>
  <actionwords>
    <actionword>
      <name>I start the coffee machine "lang"</name>
      <uid>aw-1</uid>
      <parameters>
        <parameter><name>lang</name><default><stringliteral>en</stringliteral></default></parameter>
      </parameters>
      <steps>
        <action>
          <key>action</key>
          <value>
            <template>
              <stringliteral>Start machine in </stringliteral>
              <variable><name>lang</name></variable>
            </template>
          </value>
        </action>
      </steps>
    </actionword>
    <actionword><name>I take a coffee</name><uid>aw-2</uid></actionword>
    <actionword><name>coffee should be served</name><uid>aw-3</uid></actionword>
    <actionword>
      <name>I take "count" coffees</name>
      <uid>aw-4</uid>
      <parameters>
        <parameter><name>count</name></parameter>
      </parameters>
      <steps>
        <call><actionword>I take a coffee</actionword></call>
      </steps>
    </actionword>
    <actionword>
      <name>message "text" should be displayed</name>
      <uid>aw-5</uid>
      <parameters>
        <parameter><name>text</name></parameter>
      </parameters>
    </actionword>
    <actionword>
      <name>Greet</name>
      <uid>aw-6</uid>
      <parameters>
        <parameter><name>name</name><default><stringliteral>World</stringliteral></default></parameter>
        <parameter><name>excited</name><type>bool</type><default><booleanliteral>false</booleanliteral></default></parameter>
      </parameters>
    </actionword>
  </actionwords>
</project>
"""


@pytest.fixture
def sample_xml() -> str:
    """대표 export 문서."""
    return SAMPLE_XML


@pytest.fixture
def project_xml() -> Callable[..., str]:
    """
    작은 문서 팩토리.

    Usage:
        xml = project_xml(actionwords="<actionword>...</actionword>")
    """
    def _build(scenarios: str = "", actionwords: str = "", name: str = "Demo") -> str:
        return (
            f"<project><name>{name}</name>"
            f"<scenarios>{scenarios}</scenarios>"
            f"<actionwords>{actionwords}</actionwords>"
            f"</project>"
        )

    return _build


# =============================================================================
# Graph Fixtures
# =============================================================================

@pytest.fixture
def reporter() -> Reporter:
    return Reporter()


@pytest.fixture
def parsed_graph(sample_xml: str) -> NodeGraph:
    """파싱만 된 그래프 (enrichment 전)."""
    return parse_project(sample_xml)


@pytest.fixture
def enriched_graph(sample_xml: str, reporter: Reporter) -> NodeGraph:
    """모든 pass 가 끝난 그래프."""
    graph = parse_project(sample_xml, reporter)
    enrich_project(graph, reporter)
    return graph

