"""Object-localization annotation models (Cloud Vision ``images:annotate`` contract)."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class NormalizedVertex(BaseModel):
    """Polygon vertex in 0-1 image coordinates. Missing axis = spans that axis."""

    x: float | None = None
    y: float | None = None


class BoundingPoly(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    normalized_vertices: list[NormalizedVertex] = Field(
        ...,
        alias="normalizedVertices",
        min_length=1,
        description="Polygon around the detected object",
    )


class Annotation(BaseModel):
    """One detected object."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    mid: str = Field(default="", description="Knowledge graph entity id")
    name: str = Field(..., description="Object label, may contain newlines")
    score: float = Field(default=0.0, description="Detection confidence")
    bounding_poly: BoundingPoly = Field(..., alias="boundingPoly")

    @property
    def label(self) -> str:
        return self.name.replace("\n", "")


class AnnotateError(BaseModel):
    code: int = 0
    message: str = ""


class AnnotateImageResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    localized_object_annotations: list[Annotation] | None = Field(
        default=None, alias="localizedObjectAnnotations"
    )
    error: AnnotateError | None = None


class BatchAnnotateResponse(BaseModel):
    responses: list[AnnotateImageResponse] = Field(default_factory=list)
