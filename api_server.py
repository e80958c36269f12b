"""
FastAPI wrapper for the ingredient classifier.

Endpoints:
- GET /health       : readiness probe
- POST /analyze     : classify an ingredient list (raw text or list of names)

Run locally:
    uvicorn api_server:app --host 0.0.0.0 --port 8000

Set EWG_SEARCH_URL / EWG_SEARCH_TOKEN to enable EWG enrichment; without them
the API classifies from the curated table and heuristics only.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Union

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field, field_validator

from ingredient_safety import IngredientClassifier, Settings, build_enrichment_source

app = FastAPI(
    title="Ingredient Safety API",
    description="REST API for cosmetic ingredient safety classification (curated table + heuristics + optional EWG enrichment).",
    version="1.0.0",
)

# CORS for broad consumption; tighten in production by setting allowed origins.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class AnalyzeRequest(BaseModel):
    ingredients: Union[str, List[str]] = Field(
        ...,
        description="Ingredient list as text (comma, semicolon or newline separated) or as a list of names",
    )

    @field_validator("ingredients")
    @classmethod
    def _strip_names(cls, v: Union[str, List[str]]) -> Union[str, List[str]]:
        if isinstance(v, list):
            return [name.strip() for name in v if name and name.strip()]
        return v


class AnalyzeResponse(BaseModel):
    ingredients: List[Dict]
    summary: Dict


# Shared singletons
settings = Settings.from_env()
classifier = IngredientClassifier(
    enrichment_source=build_enrichment_source(settings),
    max_workers=settings.workers,
)


def get_classifier() -> IngredientClassifier:
    return classifier


def set_classifier(new_classifier: Optional[IngredientClassifier]) -> None:
    """Swap the shared classifier (tests, custom enrichment sources)."""
    global classifier
    classifier = new_classifier or IngredientClassifier()


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.post("/analyze", response_model=AnalyzeResponse)
def analyze(request: AnalyzeRequest):
    engine = get_classifier()
    # classify() splits raw text and takes lists as already separated names
    results = engine.classify(request.ingredients)
    return {
        "ingredients": [result.to_dict() for result in results],
        "summary": engine.summarize(results).to_dict(),
    }


if __name__ == "__main__":
    uvicorn.run("api_server:app", host="0.0.0.0", port=8000, reload=False)
