import re
from dataclasses import dataclass
from typing import Pattern, Tuple

from .schema import Category, ModelVariant


@dataclass(frozen=True)
class ExtractionRule:
    pattern: Pattern[str]
    type: Category


def _rule(pattern: str, type: Category, flags: int = re.I) -> ExtractionRule:
    return ExtractionRule(re.compile(pattern, flags), type)


## tumor characteristics
TUMOR_RULES = (
    _rule(r"\d+\.?\d*\s*(cm|mm|centimeter|millimeter)", Category.TUMOR_SIZE),
    _rule(r"invasive\s+ductal\s+carcinoma", Category.TUMOR_TYPE),
    _rule(r"infiltrating\s+lobular\s+carcinoma", Category.TUMOR_TYPE),
    _rule(r"ductal\s+carcinoma\s+in\s+situ", Category.TUMOR_TYPE),
    _rule(r"DCIS", Category.TUMOR_TYPE, flags=0),  # acronym only, never "dcis"
    _rule(r"triple[-\s]negative", Category.TUMOR_CLASSIFICATION),
)

## receptor status
RECEPTOR_RULES = (
    _rule(r"ER[\s-]positive|estrogen\s+receptor\s+positive", Category.RECEPTOR_STATUS),
    _rule(r"ER[\s-]negative|estrogen\s+receptor\s+negative", Category.RECEPTOR_STATUS),
    _rule(r"PR[\s-]positive|progesterone\s+receptor\s+positive", Category.RECEPTOR_STATUS),
    _rule(r"PR[\s-]negative|progesterone\s+receptor\s+negative", Category.RECEPTOR_STATUS),
    _rule(r"HER2[\s-]positive|HER2\+", Category.RECEPTOR_STATUS),
    _rule(r"HER2[\s-]negative|HER2-", Category.RECEPTOR_STATUS),
)

## stage and grade
STAGE_RE = r"stage\s+(I{1,3}|IV|[1-4])[ABC]?"

STAGE_RULES = (
    _rule(STAGE_RE, Category.STAGE),
    _rule(r"grade\s+([1-3]|I{1,3})", Category.GRADE),
    _rule(r"T[1-4][a-c]?N[0-3]M[0-1]", Category.TNM_STAGE),
)

## treatment
TREATMENT_RULES = (
    _rule(r"chemotherapy", Category.TREATMENT),
    _rule(r"radiation\s+therapy|radiotherapy", Category.TREATMENT),
    _rule(r"mastectomy|lumpectomy|breast[-\s]conserving\s+surgery", Category.TREATMENT),
    _rule(r"tamoxifen|anastrozole|letrozole|exemestane", Category.MEDICATION),
    _rule(r"trastuzumab|pertuzumab|paclitaxel|doxorubicin", Category.MEDICATION),
)

## demographics
DEMOGRAPHIC_RULES = (
    _rule(r"\b\d{1,3}[-\s]year[-\s]old", Category.AGE),
    _rule(r"female|male", Category.GENDER),
)

# Applied in this order; results are not re-sorted by position.
RULES: Tuple[ExtractionRule, ...] = (
    TUMOR_RULES
    + RECEPTOR_RULES
    + STAGE_RULES
    + TREATMENT_RULES
    + DEMOGRAPHIC_RULES
)

MODEL_BONUS = {
    ModelVariant.BIOBERT.value: 0.05,
    ModelVariant.CLINICALBERT.value: 0.08,
    ModelVariant.PUBMEDBERT.value: 0.03,
}

# Comparison runs the variants in this order; first maximal score wins.
MODEL_ORDER = tuple(m.value for m in ModelVariant)


def model_bonus(model) -> float:
    """Fixed confidence bonus for a variant; unknown names get none."""
    if isinstance(model, ModelVariant):
        model = model.value
    return MODEL_BONUS.get(model, 0.0)
