"""
simulation/analysis_document.py

Boundary for circuit analysis documents produced by an external language
model. The raw text is parsed, repaired and validated here exactly once;
everything downstream works with a typed AnalysisDocument.

The model output is untrusted: it may be wrapped in markdown fences,
double-encoded as a JSON string, nested inside its own "summary" field,
or truncated mid-object. parse_analysis_text() never raises for any of
these; it degrades to a summary-only document instead.
"""

import json
import logging
import re
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from models.circuit import CircuitModel
from models.component import DEFAULT_LABELS, ComponentData, normalize_kind
from models.connection import ConnectionData

logger = logging.getLogger(__name__)

MAX_UNWRAP_DEPTH = 3
FALLBACK_SUMMARY = "The circuit analysis could not be structured. Please try again."

_FENCE_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)```")
_SUMMARY_RE = re.compile(r'"summary"\s*:\s*"([^"]+)"')
_PARTIAL_UNICODE_RE = re.compile(r"\\u[0-9a-fA-F]{0,3}$")


class _DocModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_scalars(cls, v, info: ValidationInfo):
        # Model output puts numbers and nulls where text is expected
        field = cls.model_fields[info.field_name]
        if field.annotation in (str, Optional[str]):
            if isinstance(v, (int, float)) and not isinstance(v, bool):
                return str(v)
            if v is None and field.annotation is str:
                return field.default if isinstance(field.default, str) else ""
        elif field.annotation is float and v is None:
            return field.default
        return v


def _keep_valid(item_model, items) -> list:
    """Validate list items one at a time, dropping only the ones that fail."""
    if not isinstance(items, list):
        return []
    kept = []
    for item in items:
        try:
            kept.append(item_model.model_validate(item))
        except ValidationError as e:
            logger.debug("Dropping invalid %s item: %d error(s)", item_model.__name__, e.error_count())
    return kept


class AnalyzedComponent(_DocModel):
    name: str = ""
    type: str = ""
    value: Optional[str] = None
    quantity: int = 1

    @field_validator("quantity", mode="before")
    @classmethod
    def _lenient_quantity(cls, v):
        try:
            return max(int(v), 1)
        except (TypeError, ValueError):
            return 1


class CircuitError(_DocModel):
    type: str = ""
    description: str = ""
    severity: str = "warning"
    location: Optional[str] = None


class Calculation(_DocModel):
    parameter: str = ""
    value: str = ""
    unit: str = ""
    formula: Optional[str] = None


class Alternative(_DocModel):
    original: str = ""
    alternatives: list[str] = Field(default_factory=list)
    reason: str = ""
    availability: Optional[str] = None

    @field_validator("alternatives", mode="before")
    @classmethod
    def _text_list(cls, v):
        return _text_items(v)


class CausalExplanation(_DocModel):
    issue: str = ""
    cause: str = ""
    effect: str = ""
    solution: str = ""


class RealWorldFactor(_DocModel):
    factor: str = ""
    impact: str = ""
    recommendation: Optional[str] = None


class DangerWarning(_DocModel):
    type: str = ""
    severity: str = "medium"
    description: str = ""
    precaution: str = ""


class Optimization(_DocModel):
    area: str = ""
    suggestion: str = ""
    benefit: str = ""


class Position(_DocModel):
    x: float = 0.0
    y: float = 0.0


class ReconstructedNode(_DocModel):
    id: str
    type: str = "resistor"
    label: str = ""
    value: str = ""
    position: Position = Field(default_factory=Position)

    @field_validator("position", mode="before")
    @classmethod
    def _lenient_position(cls, v):
        return v if isinstance(v, dict) else {}


class ReconstructedEdge(_DocModel):
    id: str = ""
    source: str
    target: str
    label: str = ""


class ReconstructedCircuit(_DocModel):
    description: str = ""
    nodes: list[ReconstructedNode] = Field(default_factory=list)
    edges: list[ReconstructedEdge] = Field(default_factory=list)
    improvements: list[str] = Field(default_factory=list)

    @field_validator("nodes", mode="before")
    @classmethod
    def _valid_nodes(cls, v):
        return _keep_valid(ReconstructedNode, v)

    @field_validator("edges", mode="before")
    @classmethod
    def _valid_edges(cls, v):
        return _keep_valid(ReconstructedEdge, v)

    @field_validator("improvements", mode="before")
    @classmethod
    def _text_list(cls, v):
        return _text_items(v)


def _text_items(v) -> list[str]:
    if not isinstance(v, list):
        return []
    return [str(item) for item in v if isinstance(item, (str, int, float))]


_ITEM_MODELS = {
    "components": AnalyzedComponent,
    "errors": CircuitError,
    "calculations": Calculation,
    "alternatives": Alternative,
    "causal_explanations": CausalExplanation,
    "real_world_factors": RealWorldFactor,
    "danger_warnings": DangerWarning,
    "optimizations": Optimization,
}


class AnalysisDocument(_DocModel):
    summary: str = ""
    components: list[AnalyzedComponent] = Field(default_factory=list)
    errors: list[CircuitError] = Field(default_factory=list)
    calculations: list[Calculation] = Field(default_factory=list)
    alternatives: list[Alternative] = Field(default_factory=list)
    causal_explanations: list[CausalExplanation] = Field(default_factory=list)
    real_world_factors: list[RealWorldFactor] = Field(default_factory=list)
    danger_warnings: list[DangerWarning] = Field(default_factory=list)
    optimizations: list[Optimization] = Field(default_factory=list)
    reconstructed_circuit: Optional[ReconstructedCircuit] = None
    user_answer: Optional[str] = None

    @field_validator(*_ITEM_MODELS, mode="before")
    @classmethod
    def _valid_items(cls, v, info: ValidationInfo):
        # Model output sometimes mixes strings or half-filled objects into arrays
        return _keep_valid(_ITEM_MODELS[info.field_name], v)


def parse_analysis_text(text: str) -> AnalysisDocument:
    """
    Turn raw model output into an AnalysisDocument.

    Steps: strip code fences, decode (repairing truncation if needed),
    unwrap self-nested documents up to MAX_UNWRAP_DEPTH, validate.
    """
    content = _strip_fences((text or "").strip())

    data = _decode(content)
    if data is None:
        logger.warning("Analysis text is not valid JSON, even after repair")
        return _fallback_document(content)

    data = _unwrap(data)
    if not isinstance(data, dict):
        return _fallback_document(content)

    return validate_analysis(data, content)


def validate_analysis(data: dict, raw_text: str = "") -> AnalysisDocument:
    """Validate a decoded document, degrading field by field if needed."""
    try:
        document = AnalysisDocument.model_validate(data)
    except ValidationError as e:
        logger.warning("Analysis document failed validation: %s", e.error_count())
        # Keep whatever top-level fields validate on their own
        salvaged: dict[str, Any] = {}
        for key, value in data.items():
            try:
                AnalysisDocument.model_validate({key: value})
            except ValidationError:
                continue
            salvaged[key] = value
        document = AnalysisDocument.model_validate(salvaged)

    if not document.summary:
        document.summary = _extract_summary(raw_text) or FALLBACK_SUMMARY
    return document


def _strip_fences(content: str) -> str:
    match = _FENCE_RE.search(content)
    return match.group(1).strip() if match else content


def _decode(content: str):
    try:
        return json.loads(content)
    except json.JSONDecodeError:
        pass
    try:
        return json.loads(repair_truncated_json(content))
    except json.JSONDecodeError:
        return None


def repair_truncated_json(content: str) -> str:
    """
    Close a JSON text that was cut off mid-stream.

    Closes an unterminated string value (a cut-off object key is dropped
    instead), removes a trailing comma, then appends the closing brackets
    and braces still open, innermost first.
    """
    fixed = content.rstrip()
    stack = []
    in_string = False
    escaped = False
    last_string_start = -1

    for i, ch in enumerate(fixed):
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
            last_string_start = i
        elif ch in "{[":
            stack.append(ch)
        elif ch in "}]" and stack:
            stack.pop()

    if in_string:
        before = fixed[:last_string_start].rstrip()
        if stack and stack[-1] == "{" and before.endswith(("{", ",")):
            fixed = before
        else:
            if escaped:
                fixed = fixed[:-1]
            fixed = _PARTIAL_UNICODE_RE.sub("", fixed) + '"'
    fixed = re.sub(r",\s*$", "", fixed)
    # A dangling key ("key": with no value) gets a null value
    if re.search(r":\s*$", fixed):
        fixed += " null"

    for opener in reversed(stack):
        fixed += "}" if opener == "{" else "]"
    return fixed


def _unwrap(data, depth: int = 0):
    """Peel JSON-string wrappers off a document, at most MAX_UNWRAP_DEPTH times.

    Handles a document encoded as a JSON string, and a document whose
    "summary" field holds the real document. When a layer cannot be
    decoded the current (outer) document is used.
    """
    if depth >= MAX_UNWRAP_DEPTH:
        return data

    if isinstance(data, str):
        try:
            inner = json.loads(data)
        except json.JSONDecodeError:
            return data
        return _unwrap(inner, depth + 1)

    if isinstance(data, dict):
        summary = data.get("summary")
        if isinstance(summary, str) and summary.lstrip().startswith("{"):
            try:
                inner = json.loads(_strip_fences(summary.strip()))
            except json.JSONDecodeError:
                return data
            if isinstance(inner, dict) and "summary" in inner:
                return _unwrap(inner, depth + 1)
    return data


def _extract_summary(content: str) -> str:
    match = _SUMMARY_RE.search(content or "")
    return match.group(1) if match else ""


def _fallback_document(content: str) -> AnalysisDocument:
    """Summary-only document, with the summary scraped out if possible."""
    return AnalysisDocument(summary=_extract_summary(content) or FALLBACK_SUMMARY)


def reconstructed_to_circuit(document: AnalysisDocument, id_generator=None) -> CircuitModel:
    """
    Convert a document's reconstructed circuit into a circuit document.

    Node ids are kept. Edges without an id get one minted by the model;
    edges whose endpoints are not nodes are dropped. Switches come in
    closed, since a reconstruction describes the intended working circuit.

    Raises:
        ValueError: If the document has no reconstructed circuit.
    """
    circuit = document.reconstructed_circuit
    if circuit is None:
        raise ValueError("Analysis document has no reconstructed circuit.")

    model = CircuitModel(id_generator=id_generator) if id_generator else CircuitModel()
    model.name = circuit.description

    for node in circuit.nodes:
        kind = normalize_kind(node.type)
        model.add_component(ComponentData(
            component_id=node.id,
            kind=kind,
            label=node.label or DEFAULT_LABELS.get(kind, kind),
            value=node.value,
            closed=(kind == "switch"),
            position=(node.position.x, node.position.y),
        ))

    for edge in circuit.edges:
        if edge.source not in model.components or edge.target not in model.components:
            logger.warning("Dropping reconstructed edge %s -> %s: unknown endpoint",
                           edge.source, edge.target)
            continue
        model.add_connection(ConnectionData(
            connection_id=edge.id or model.new_connection_id(),
            source_id=edge.source,
            target_id=edge.target,
        ))

    return model
