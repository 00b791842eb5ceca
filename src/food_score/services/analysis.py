"""Whole-product analysis."""

import logging
from dataclasses import dataclass

from food_score.domain.analysis import ProductAnalysis, ProductInput
from food_score.domain.regulatory import RegulatoryRow
from food_score.services.additive_load import AdditiveLoadCalculator, normalized_score
from food_score.services.functions import FunctionClassifier
from food_score.services.interactions import InteractionDetector, summarize
from food_score.services.nutrient_analysis import analyze_nutrients
from food_score.services.personalization import PersonalizationService
from food_score.services.profiles import ProfileRepository
from food_score.services.regulatory import RegulatoryComparator
from food_score.services.resolver import AdditiveResolver
from food_score.services.scoring import HealthScorer

_logger = logging.getLogger(__name__)


@dataclass
class ProductAnalyzer:
    """Runs every analysis component over one product."""

    resolver: AdditiveResolver
    functions: FunctionClassifier
    load_calculator: AdditiveLoadCalculator
    interactions: InteractionDetector
    regulatory: RegulatoryComparator
    scorer: HealthScorer
    personalization: PersonalizationService
    profiles: ProfileRepository

    async def analyze(
        self,
        product: ProductInput,
        user_id: str | None = None,
        allow_network: bool = True,
    ) -> ProductAnalysis:
        profile = self.profiles.get_profile(user_id) if user_id else None
        additives = list(product.additives)

        health_score = self.scorer.score_with_profile(
            product.nutrients,
            additives,
            product.nova_group,
            product.labels,
            product.categories,
            profile,
        )
        resolved = await self.resolver.resolve_many(additives, allow_network=allow_network)
        load = self.load_calculator.load(additives)
        warnings = self.interactions.detect(additives)

        regulations: dict[str, list[RegulatoryRow]] = {}
        for additive in resolved:
            if self.regulatory.has_data(additive.code):
                regulations[additive.code] = self.regulatory.compare(additive.code)

        personalized = None
        if profile is not None:
            personalized = self.personalization.analyze(
                product.nutrients,
                additives,
                product.labels,
                product.ingredients_text,
                profile,
            )

        _logger.info(
            "Analyzed product: score=%s additives=%s personalized=%s",
            health_score.score,
            len(additives),
            personalized is not None,
        )
        return ProductAnalysis(
            health_score=health_score,
            nutrients=analyze_nutrients(product.nutrients),
            additives=resolved,
            function_groups=self.functions.group_by_function(additives),
            additive_load=load,
            additive_load_normalized=normalized_score(load),
            interactions=warnings,
            interaction_summary=summarize(warnings),
            regulations=regulations,
            personalized=personalized,
        )
