from bodyscore.normalizers.base import CategoryNormalizer, MetricDefinition
from bodyscore.normalizers.body_composition import BodyCompositionNormalizer
from bodyscore.normalizers.fitness import FitnessNormalizer
from bodyscore.normalizers.lifestyle import LifestyleNormalizer
from bodyscore.normalizers.metabolic import MetabolicNormalizer
from bodyscore.normalizers.registry import NORMALIZERS, NormalizerProvider
from bodyscore.normalizers.vitals import VitalsNormalizer

__all__ = [
    "CategoryNormalizer",
    "MetricDefinition",
    "BodyCompositionNormalizer",
    "FitnessNormalizer",
    "VitalsNormalizer",
    "MetabolicNormalizer",
    "LifestyleNormalizer",
    "NORMALIZERS",
    "NormalizerProvider",
]
