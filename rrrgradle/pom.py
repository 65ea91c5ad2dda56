"""Reading Maven POM files."""

from __future__ import annotations

import io
import sys
import xml.sax
import xml.sax.handler
from dataclasses import dataclass, field, replace
from pathlib import Path


@dataclass
class PomDependency:
    """One ``<dependency>`` entry."""

    group_id: str
    artifact_id: str
    version: str
    scope: str | None = None
    optional: bool = False


@dataclass
class ParentPom:
    """The ``<parent>`` coordinates of a POM."""

    group_id: str
    artifact_id: str
    version: str


@dataclass
class PomModel:
    """The parts of a POM needed for dependency resolution."""

    group_id: str | None
    artifact_id: str
    version: str | None
    properties: dict[str, str] = field(default_factory=dict)
    dependencies: list[PomDependency] = field(default_factory=list)
    parent: ParentPom | None = None


def resolve_placeholders(text: str, props: dict[str, str]) -> str:
    """Replace ``${name}`` placeholders from ``props`` until none remain to replace."""
    result = text
    seen = {result}
    while True:
        replaced = result
        for key, value in props.items():
            pattern = "${" + key + "}"
            if pattern in replaced:
                replaced = replaced.replace(pattern, value)
        if replaced == result or replaced in seen:
            return replaced
        seen.add(replaced)
        result = replaced


class _PomHandler(xml.sax.handler.ContentHandler):
    def __init__(self) -> None:
        super().__init__()
        self._chunks: list[str] = []
        self._tag = ""
        self._dep = PomDependency("", "", "")
        self._in_dependency = False
        self._in_properties = False
        self._in_parent = False
        self.dependencies: list[PomDependency] = []
        self.properties: dict[str, str] = {}
        self.parent = ParentPom("", "", "")
        self.artifact_id = ""
        self.group_id: str | None = None
        self.version: str | None = None

    def characters(self, content: str) -> None:
        self._chunks.append(content)

    def startElement(self, name: str, attrs) -> None:
        self._flush()
        match name:
            case "dependency":
                self._in_dependency = True
                self._dep = PomDependency("", "", "")
            case "properties":
                self._in_properties = True
            case "parent":
                self._in_parent = True
            case _:
                self._tag = name

    def endElement(self, name: str) -> None:
        self._flush()
        match name:
            case "dependency":
                dep = self._dep
                if dep.group_id and dep.artifact_id and dep.version:
                    self.dependencies.append(replace(dep))
                self._in_dependency = False
            case "properties":
                self._in_properties = False
            case "parent":
                self._in_parent = False
        self._tag = ""

    def endDocument(self) -> None:
        self._flush()

    def _flush(self) -> None:
        value = "".join(self._chunks).strip()
        self._chunks.clear()
        if value:
            self._text(value)

    def _text(self, value: str) -> None:
        tag = self._tag
        if self._in_properties:
            self.properties[tag] = value
        elif self._in_parent:
            match tag:
                case "groupId":
                    self.parent.group_id = value
                case "artifactId":
                    self.parent.artifact_id = value
                case "version":
                    self.parent.version = value
        elif self._in_dependency:
            match tag:
                case "groupId":
                    self._dep.group_id = resolve_placeholders(value, self.properties)
                case "artifactId":
                    self._dep.artifact_id = value
                case "version":
                    self._dep.version = resolve_placeholders(value, self.properties)
                case "scope":
                    self._dep.scope = value
                case "optional":
                    self._dep.optional = value.lower() == "true"
        else:
            match tag:
                case "artifactId":
                    self.artifact_id = value
                case "groupId":
                    self.group_id = value
                case "version":
                    self.version = value

    def model(self) -> PomModel:
        parent = self.parent
        return PomModel(
            group_id=self.group_id if self.group_id is not None else (parent.group_id or None),
            artifact_id=self.artifact_id,
            version=self.version if self.version is not None else (parent.version or None),
            properties=dict(self.properties),
            dependencies=list(self.dependencies),
            parent=parent if parent.group_id else None,
        )


def parse_pom_text(text: str | bytes) -> PomModel:
    """Parse POM content.

    Malformed XML is reported on stderr and whatever was read before the
    error is returned.
    """
    data = text.encode("utf-8") if isinstance(text, str) else text
    handler = _PomHandler()
    parser = xml.sax.make_parser()
    parser.setFeature(xml.sax.handler.feature_namespaces, False)
    parser.setFeature(xml.sax.handler.feature_external_ges, False)
    parser.setContentHandler(handler)
    try:
        parser.parse(io.BytesIO(data))
    except xml.sax.SAXException as exc:
        print(f"Error reading POM: {exc}", file=sys.stderr)
    return handler.model()


def parse_pom_model(path: str | Path) -> PomModel:
    """Parse the POM file at ``path``."""
    return parse_pom_text(Path(path).read_bytes())