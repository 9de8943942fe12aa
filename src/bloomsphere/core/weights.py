"""
Bloom's taxonomy weight configuration for question generation.
"""
from typing import Dict, Optional, Union

from src.bloomsphere import config
from src.bloomsphere.models.bloom_models import BLOOM_CATEGORIES, BloomCategory, BloomWeights


class WeightsEngine:
    """
    Hold the per-category weights sent with a Generate request.

    Weights are transmitted literally; the service does any scaling. The
    only rule enforced here is that generation is blocked while the total
    is zero.
    """

    def __init__(self, weights: Optional[Dict[Union[BloomCategory, str], float]] = None):
        self._weights: BloomWeights = {}
        self._assign(weights if weights is not None else config.DEFAULT_WEIGHTS)

    @property
    def weights(self) -> BloomWeights:
        return dict(self._weights)

    def get(self, category: Union[BloomCategory, str]) -> float:
        return self._weights[BloomCategory(category)]

    def set(self, category: Union[BloomCategory, str], value: float):
        """Replace the weight of one category."""
        self._weights[BloomCategory(category)] = value

    def apply_preset(self, name: str):
        """
        Overwrite every weight with a named preset.

        Args:
            name: One of 'balanced', 'high-order' or 'recall'

        Raises:
            ValueError: If the preset is unknown
        """
        if name not in config.WEIGHT_PRESETS:
            raise ValueError(
                f"Unknown preset '{name}'. Choose from: {', '.join(config.WEIGHT_PRESETS)}")
        self._assign(config.WEIGHT_PRESETS[name])

    def total(self) -> float:
        return sum(self._weights.values())

    def is_blocked(self) -> bool:
        """True while the weights cannot be used for generation."""
        return self.total() == 0

    def as_payload(self) -> Dict[str, float]:
        return {category.value: self._weights[category] for category in BLOOM_CATEGORIES}

    def _assign(self, weights):
        vector = {BloomCategory(k): v for k, v in weights.items()}
        missing = [c.value for c in BLOOM_CATEGORIES if c not in vector]
        if missing:
            raise ValueError(f"Missing weights for: {', '.join(missing)}")
        self._weights = {c: vector[c] for c in BLOOM_CATEGORIES}
