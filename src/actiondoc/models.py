"""Canonical Pydantic models shared across all actiondoc modules.

This is the single source of truth for data shapes in the project. Every other
module imports from here rather than defining its own models. The models fall
into three groups:

**Type descriptors** -- the structured form of a (possibly generic) type
reference, a tagged union discriminated by ``kind``:
    :class:`ClassType`, :class:`ParameterizedType`, :class:`TypeVariable`,
    :class:`WildcardType`, and :class:`GenericArrayType`.

**Doc metadata** -- produced by the external reflector and loaded from the
metadata file; immutable once validated:
    :class:`AnnotationMeta`, :class:`TypeDocMeta`, :class:`ActionDocMeta`,
    :class:`JobDocMeta`, and :class:`DocumentMeta`.

**Configuration models** -- read from the project config file:
    :class:`MetaRegistry`, :class:`SwaggerOptions`, and
    :class:`ProjectConfig`.

Every metadata model is ``frozen``; the pipeline reads them and builds new,
independent output dicts.
"""

from __future__ import annotations

import enum
import re
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


_FROZEN = ConfigDict(frozen=True)


def class_title(name: str) -> str:
    """Return the class title of a qualified class name.

    The package is removed and nested-class markers become dots, e.g.
    ``org.app.AppCDef$MemberStatus`` becomes ``AppCDef.MemberStatus``.
    """
    return name.rsplit(".", 1)[-1].replace("$", ".")


# --- Type descriptors ---


class ClassTrait(str, enum.Enum):
    """Capabilities of a class the pipeline dispatches on."""

    ITERABLE = "iterable"
    MAP = "map"
    ENUM = "enum"
    CLASSIFICATION = "classification"
    OPTIONAL = "optional"
    ACTION_RESPONSE = "action_response"
    API_RESPONSE = "api_response"


class PlainEnumConstant(BaseModel):
    """An enum constant without a code or alias."""

    model_config = _FROZEN

    kind: Literal["plain"] = "plain"
    name: str


class ClassifiedEnumConstant(BaseModel):
    """An enum constant of a classification type, with a stable code and an alias."""

    model_config = _FROZEN

    kind: Literal["classified"] = "classified"
    name: str
    code: str
    alias: str = ""


EnumConstant = Annotated[
    Union[PlainEnumConstant, ClassifiedEnumConstant],
    Field(discriminator="kind"),
]


class ClassType(BaseModel):
    """A plain (non-parameterized) class reference.

    Example::

        ClassType(
            name="org.app.AppCDef$MemberStatus",
            traits=[ClassTrait.ENUM, ClassTrait.CLASSIFICATION],
            enum_constants=[
                ClassifiedEnumConstant(name="Formalized", code="FML", alias="Formal"),
            ],
        )
    """

    model_config = _FROZEN

    kind: Literal["class"] = "class"
    name: str = Field(description="Qualified class name, '$' marks nested classes")
    traits: list[ClassTrait] = Field(default_factory=list)
    enum_constants: list[EnumConstant] = Field(
        default_factory=list, description="Declared constants, for enum types"
    )

    @property
    def simple_name(self) -> str:
        """Last segment of the qualified name."""
        return re.split(r"[.$]", self.name)[-1]

    @property
    def title(self) -> str:
        """Class title, e.g. ``AppCDef.MemberStatus``."""
        return class_title(self.name)

    def has_trait(self, trait: ClassTrait) -> bool:
        return trait in self.traits

    @property
    def is_enum(self) -> bool:
        return ClassTrait.ENUM in self.traits


class ParameterizedType(BaseModel):
    """A generic class applied to type arguments, e.g. ``List<String>``."""

    model_config = _FROZEN

    kind: Literal["parameterized"] = "parameterized"
    raw: ClassType
    arguments: list[TypeDescriptor] = Field(default_factory=list)


class TypeVariable(BaseModel):
    """An unresolved type variable such as ``T extends Number``."""

    model_config = _FROZEN

    kind: Literal["variable"] = "variable"
    name: str
    bounds: list[TypeDescriptor] = Field(default_factory=list)


class WildcardType(BaseModel):
    """A wildcard argument such as ``? extends Number``."""

    model_config = _FROZEN

    kind: Literal["wildcard"] = "wildcard"
    upper_bounds: list[TypeDescriptor] = Field(default_factory=list)
    lower_bounds: list[TypeDescriptor] = Field(default_factory=list)


class GenericArrayType(BaseModel):
    """An array whose component is generic, e.g. ``List<String>[]``."""

    model_config = _FROZEN

    kind: Literal["generic_array"] = "generic_array"
    component: TypeDescriptor


TypeDescriptor = Annotated[
    Union[ClassType, ParameterizedType, TypeVariable, WildcardType, GenericArrayType],
    Field(discriminator="kind"),
]

OBJECT_TYPE = ClassType(name="java.lang.Object")
"""The "unknown" fallback returned when a type argument cannot be resolved."""


# --- Doc metadata ---


class AnnotationMeta(BaseModel):
    """An annotation attached to a field, parameter or method.

    ``attributes`` holds the values present on the annotation and
    ``defaults`` the declared default of each attribute; only attributes
    whose value differs from the default are rendered. ``meta_annotations``
    are the annotations on the annotation type itself (one level), which is
    where a ``Constraint`` marker identifies validation annotations.
    """

    model_config = _FROZEN

    type_name: str = Field(description="Qualified annotation type name")
    attributes: dict[str, Any] = Field(default_factory=dict)
    defaults: dict[str, Any] = Field(default_factory=dict)
    meta_annotations: list[AnnotationMeta] = Field(default_factory=list)

    @property
    def simple_name(self) -> str:
        return re.split(r"[.$]", self.type_name)[-1]

    def explicit_attributes(self) -> dict[str, Any]:
        """Return the attributes whose value differs from the declared default."""
        return {
            key: value
            for key, value in self.attributes.items()
            if key not in self.defaults or self.defaults[key] != value
        }

    def get(self, key: str, default: Any = None) -> Any:  # noqa: ANN401
        """Return an attribute value, falling back to its declared default."""
        if key in self.attributes:
            return self.attributes[key]
        return self.defaults.get(key, default)


class TypeDocMeta(BaseModel):
    """Describes one type occurrence: a field, a return type, or a parameter.

    ``type`` is the raw class; ``type_name`` is the display name and may
    carry generics (``JsonResponse<ProductsResult>``). ``generic_type`` is
    the first type argument's class; when the reflector only supplies the
    full ``declared_type`` descriptor it is resolved from there (see
    :func:`actiondoc.meta.generic.resolve_generic_type`).

    ``nested_properties`` is non-empty only for non-native composite types.
    """

    model_config = _FROZEN

    name: str = ""
    public_name: Optional[str] = Field(
        default=None, description="Externally visible field name, defaults to name"
    )
    type: ClassType = OBJECT_TYPE
    type_name: str = ""
    simple_type_name: Optional[str] = None
    generic_type: Optional[ClassType] = None
    declared_type: Optional[TypeDescriptor] = None
    value: Optional[str] = None
    description: Optional[str] = None
    comment: Optional[str] = None
    annotations: list[AnnotationMeta] = Field(default_factory=list)
    annotation_list: list[str] = Field(default_factory=list)
    nested_properties: list[TypeDocMeta] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _default_names(cls, data: Any) -> Any:  # noqa: ANN401
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if data.get("public_name") is None:
            data["public_name"] = data.get("name", "")
        if not data.get("type_name"):
            raw = data.get("type")
            if isinstance(raw, ClassType):
                data["type_name"] = raw.name
            elif isinstance(raw, dict) and raw.get("name"):
                data["type_name"] = raw["name"]
            else:
                data["type_name"] = OBJECT_TYPE.name
        return data

    def has_annotation(self, *names: str) -> bool:
        """Whether an annotation with one of *names* (simple or qualified) is attached."""
        return any(
            anno.simple_name in names or anno.type_name in names
            for anno in self.annotations
        )


class SuccessHttpStatus(BaseModel):
    """Success status declared on an action execute method."""

    model_config = _FROZEN

    status: int
    description: Optional[str] = None


class ActionDocMeta(BaseModel):
    """Describes one discovered request-handling method.

    ``method_name`` follows the ``verb$disambiguator`` convention, e.g.
    ``get$index`` or ``post$update``; a plain ``index`` carries no verb.
    """

    model_config = _FROZEN

    url: str
    type_name: str = ""
    simple_type_name: Optional[str] = None
    description: Optional[str] = None
    type_comment: Optional[str] = None
    field_type_doc_metas: list[TypeDocMeta] = Field(default_factory=list)
    method_name: str
    method_comment: Optional[str] = None
    annotations: list[AnnotationMeta] = Field(default_factory=list)
    annotation_list: list[str] = Field(default_factory=list)
    parameter_type_doc_metas: list[TypeDocMeta] = Field(
        default_factory=list, description="Path parameters in URL order"
    )
    form_type_doc_meta: Optional[TypeDocMeta] = None
    return_type_doc_meta: Optional[TypeDocMeta] = None
    success_http_status: Optional[SuccessHttpStatus] = None
    file_line_count: Optional[int] = None
    method_line_count: Optional[int] = None


class JobDocMeta(BaseModel):
    """Describes one discovered scheduled job. Carries no HTTP semantics."""

    model_config = _FROZEN

    job_key: Optional[str] = None
    job_unique: Optional[str] = None
    job_title: Optional[str] = None
    job_description: Optional[str] = None
    cron_exp: Optional[str] = None
    type_name: str = ""
    simple_type_name: Optional[str] = None
    description: Optional[str] = None
    type_comment: Optional[str] = None
    field_type_doc_metas: list[TypeDocMeta] = Field(default_factory=list)
    method_name: str = "run"
    method_comment: Optional[str] = None
    params: Optional[dict[str, Any]] = None
    notice_log_level: Optional[str] = None
    concurrent_exec: Optional[str] = None
    triggered_job_keys: list[str] = Field(default_factory=list)
    file_line_count: Optional[int] = None
    method_line_count: Optional[int] = None


class DocumentMeta(BaseModel):
    """Root of a metadata file: application info plus every discovered action and job."""

    model_config = _FROZEN

    title: str = "application"
    scheme: str = "http"
    context_path: str = ""
    version: Optional[str] = Field(
        default=None, description="Application version appended to the base path"
    )
    actions: list[ActionDocMeta] = Field(default_factory=list)
    jobs: list[JobDocMeta] = Field(default_factory=list)


# --- Configuration ---


class MetaRegistry(BaseModel):
    """Read-only lookup tables consulted by the swagger part handlers.

    Built once at startup (defaults, optionally extended by the project
    config) and shared by every handler without locking.
    """

    model_config = _FROZEN

    produces: dict[str, str] = Field(
        default_factory=lambda: {
            "JsonResponse": "application/json",
            "XmlResponse": "application/xml",
            "HtmlResponse": "text/html",
            "StreamResponse": "application/octet-stream",
        },
        description="Response wrapper simple name -> media type",
    )
    required_markers: list[str] = Field(
        default_factory=lambda: ["Required", "NotNull", "NotEmpty"],
        description="Annotation names that mark a property as required",
    )
    schemaless_media_types: list[str] = Field(
        default_factory=lambda: ["text/html", "application/octet-stream"],
        description="Media types whose success response carries no schema",
    )

    def is_required_marker(self, annotation: AnnotationMeta) -> bool:
        markers = self.required_markers
        return annotation.simple_name in markers or annotation.type_name in markers


class HeaderParameter(BaseModel):
    """A header parameter added to every path item."""

    name: str
    default: Optional[str] = None
    description: Optional[str] = None


class SecurityDefinition(BaseModel):
    """An API key security definition sent in a header."""

    name: str
    type: str = "apiKey"
    location: str = Field(default="header", description="Where the key is sent")
    description: Optional[str] = None


class SwaggerOptions(BaseModel):
    """Options of swagger generation that can live in the project config.

    Behaviour that needs code (custom HTTP-method policies, status lookups)
    is passed to :class:`~actiondoc.swagger.creator.SwaggerSpecCreator` as
    hooks instead.
    """

    title: Optional[str] = Field(
        default=None, description="Overrides the title from the metadata file"
    )
    schemes: Optional[list[str]] = None
    base_path: Optional[str] = Field(
        default=None, description="Replaces the base path derived from the context path"
    )
    default_form_http_method: str = Field(
        default="get", description="Verb for actions whose verb cannot be inferred"
    )
    target_url_prefixes: list[str] = Field(
        default_factory=list, description="Only document actions under these URLs"
    )
    success_http_status: Optional[int] = None
    failure_http_status_causes: dict[int, list[str]] = Field(
        default_factory=dict, description="Failure status -> cause exception names"
    )
    header_parameters: list[HeaderParameter] = Field(default_factory=list)
    security_definitions: list[SecurityDefinition] = Field(default_factory=list)


class ProjectConfig(BaseModel):
    """Project-local configuration (``./actiondoc.json`` or ``./actiondoc.yaml``)."""

    swagger: SwaggerOptions = Field(default_factory=SwaggerOptions)
    registry: MetaRegistry = Field(default_factory=MetaRegistry)
    output_dir: Optional[str] = Field(
        default=None, description="Overrides the build-tool derived output directory"
    )


ParameterizedType.model_rebuild()
TypeVariable.model_rebuild()
WildcardType.model_rebuild()
GenericArrayType.model_rebuild()
AnnotationMeta.model_rebuild()
TypeDocMeta.model_rebuild()
