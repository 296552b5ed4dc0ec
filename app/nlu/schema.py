from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Category(str, Enum):
    TUMOR_SIZE = "TUMOR_SIZE"
    TUMOR_TYPE = "TUMOR_TYPE"
    TUMOR_CLASSIFICATION = "TUMOR_CLASSIFICATION"
    RECEPTOR_STATUS = "RECEPTOR_STATUS"
    STAGE = "STAGE"
    GRADE = "GRADE"
    TNM_STAGE = "TNM_STAGE"
    TREATMENT = "TREATMENT"
    MEDICATION = "MEDICATION"
    AGE = "AGE"
    GENDER = "GENDER"


class ModelVariant(str, Enum):
    BIOBERT = "BioBERT"
    CLINICALBERT = "ClinicalBERT"
    PUBMEDBERT = "PubMedBERT"


# snake_case in Python, camelCase on the wire
class _Wire(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )


class EntityMatch(_Wire):
    text: str        # the surface span
    type: Category
    confidence: float
    start: int       # char offset
    end: int


class NERResult(_Wire):
    entities: List[EntityMatch] = Field(default_factory=list)
    entity_count: int = 0
    avg_confidence: float = 0.0
    entity_types: List[Category] = Field(default_factory=list)


class SummaryResult(_Wire):
    summary: str
    original_length: int
    summary_length: int
    original_words: int
    summary_words: int
    compression_ratio: str


class QAResult(_Wire):
    question: str
    answer: str
    confidence: float
    context: str
    model: Optional[str] = None


class ModelRun(NERResult):
    model: str


class Recommendation(_Wire):
    model: str
    reason: str


class ComparisonResult(_Wire):
    models: List[ModelRun]
    recommendation: Recommendation
