"""
CLI entrypoint to classify a cosmetic ingredient list.

Flow:
- Parse user inputs (ingredient text or file, output format, enrichment and
  concurrency options, language).
- Load settings from the environment and pick the enrichment source (EWG
  search proxy, or offline when unconfigured or --no-enrichment is given).
- Build the IngredientClassifier and classify every ingredient in order.
- Render either a text dashboard or a JSON payload.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from ingredient_safety import (
    IngredientClassifier,
    IngredientResult,
    NullEnrichmentSource,
    SafetyLevel,
    Settings,
    build_enrichment_source,
)

MAX_SCORE = 10

# Simple i18n table for CLI output (extendable with more locales).
TRANSLATIONS = {
    "en": {
        "quick_view": "=== Quick view ===",
        "details": "=== Details ===",
        "ingredients_analyzed": "Ingredients analyzed",
        "average_score": "Average score",
        "highest_concern": "Highest concern",
        "no_ingredients": "No ingredients found in the input.",
        "function": "function",
        "common_use": "common use",
        "concerns": "concerns",
        "benefits": "benefits",
        "restrictions": "restrictions",
        "scientific_name": "scientific name",
        "level_low": "low concern",
        "level_moderate": "moderate concern",
        "level_high": "high concern",
    },
    "pt": {
        "quick_view": "=== Visão rápida ===",
        "details": "=== Detalhes ===",
        "ingredients_analyzed": "Ingredientes analisados",
        "average_score": "Pontuação média",
        "highest_concern": "Maior preocupação",
        "no_ingredients": "Nenhum ingrediente encontrado na entrada.",
        "function": "função",
        "common_use": "uso comum",
        "concerns": "preocupações",
        "benefits": "benefícios",
        "restrictions": "restrições",
        "scientific_name": "nome científico",
        "level_low": "baixa preocupação",
        "level_moderate": "preocupação moderada",
        "level_high": "alta preocupação",
    },
}

LEVEL_KEYS = {
    SafetyLevel.LOW: "level_low",
    SafetyLevel.MODERATE: "level_moderate",
    SafetyLevel.HIGH: "level_high",
}


def _t(key: str, lang: str = "en") -> str:
    """Translate a key to the requested language with English fallback."""
    bundle = TRANSLATIONS.get(lang, TRANSLATIONS["en"])
    template = bundle.get(key) or TRANSLATIONS["en"].get(key, key)
    return template


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Configure and parse CLI arguments."""
    parser = argparse.ArgumentParser(
        description="Classify cosmetic ingredients by safety and function"
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--ingredients",
        help="Ingredient list separated by commas, semicolons or newlines",
    )
    source.add_argument(
        "--file",
        type=Path,
        default=None,
        help="Read the ingredient list from a text file. Defaults to stdin when neither option is given.",
    )
    parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )
    parser.add_argument(
        "--no-enrichment",
        action="store_true",
        default=False,
        help="Skip the EWG lookup even if EWG_SEARCH_URL is configured",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Concurrent enrichment lookups (default: INGREDIENT_WORKERS or 1)",
    )
    parser.add_argument(
        "--lang",
        default="en",
        help="Language for output labels (e.g. en, pt). Defaults to en.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        default=False,
        help="Log per-ingredient provenance and lookup details",
    )
    return parser.parse_args(argv)


def render_bar(score: float, width: int = 30) -> str:
    """ASCII bar to visualize a score on the 0-10 scale."""
    ratio = max(0.0, min(score / MAX_SCORE, 1.0))
    filled = int(ratio * width)
    return f"[{'#' * filled}{'.' * (width - filled)}]"


def level_label(level: SafetyLevel, lang: str = "en") -> str:
    return _t(LEVEL_KEYS[level], lang)


def render_text_result(results: List[IngredientResult], lang: str = "en") -> str:
    """Pretty-print a classified ingredient list in a text-first dashboard layout."""
    if not results:
        return _t("no_ingredients", lang)

    summary = IngredientClassifier.summarize(results)
    lines = []

    # Quick view (what users see first)
    lines.append(_t("quick_view", lang))
    lines.append(f"{_t('ingredients_analyzed', lang)}: {summary.total}")
    lines.append(
        f"{_t('average_score', lang)}: {summary.average_score:.1f}/{MAX_SCORE} "
        f"{render_bar(summary.average_score)}"
    )
    for level in SafetyLevel:
        lines.append(f"  - {level_label(level, lang)}: {summary.per_level[level.value]}")
    worst = summary.highest_concern
    if worst:
        lines.append(
            f"{_t('highest_concern', lang)}: {worst.name} {worst.ewg_score}/{MAX_SCORE} "
            f"({level_label(worst.safety_level, lang)})"
        )

    # Detailed breakdown in input order
    lines.append("\n" + _t("details", lang))
    for result in results:
        lines.append(
            f"- {result.name}: {result.ewg_score}/{MAX_SCORE} "
            f"({level_label(result.safety_level, lang)}) {render_bar(result.ewg_score)}"
        )
        lines.append(f"    {_t('function', lang)}: {result.function}")
        lines.append(f"    {_t('common_use', lang)}: {result.common_use}")
        lines.append(f"    {_t('concerns', lang)}: {result.reason_for_concern}")
        if result.scientific_name:
            lines.append(f"    {_t('scientific_name', lang)}: {result.scientific_name}")
        if result.benefits:
            lines.append(f"    {_t('benefits', lang)}: {result.benefits}")
        if result.restrictions:
            lines.append(f"    {_t('restrictions', lang)}: {result.restrictions}")
    return "\n".join(lines)


def read_ingredient_text(args: argparse.Namespace) -> str:
    if args.ingredients is not None:
        return args.ingredients
    if args.file is not None:
        return args.file.read_text(encoding="utf-8")
    return sys.stdin.read()


def build_classifier(args: argparse.Namespace, settings: Settings) -> IngredientClassifier:
    if args.no_enrichment:
        source = NullEnrichmentSource()
    else:
        source = build_enrichment_source(settings)
    workers = args.workers if args.workers is not None else settings.workers
    return IngredientClassifier(enrichment_source=source, max_workers=workers)


def main(argv: Optional[List[str]] = None) -> None:
    """Entrypoint: classify the ingredient list and render the report."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    settings = Settings.from_env()
    classifier = build_classifier(args, settings)
    results = classifier.analyze_text(read_ingredient_text(args))

    if args.format == "json":
        output = {
            "ingredients": [result.to_dict() for result in results],
            "summary": classifier.summarize(results).to_dict(),
        }
        print(json.dumps(output, indent=2, ensure_ascii=False))
    else:
        print(render_text_result(results, lang=args.lang))


if __name__ == "__main__":
    main()
