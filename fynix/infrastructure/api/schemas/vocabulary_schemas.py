"""Pydantic schemas for vocabulary endpoints."""

from pydantic import BaseModel, Field

from fynix.domain.learning.entities.quiz_item import QuizDirection, QuizMode


class VocabEntrySchema(BaseModel):
    id: str
    term: str
    translation: str
    created_at: str

    model_config = {"from_attributes": True}


class VocabListSchema(BaseModel):
    id: str
    name: str
    source_lang: str
    target_lang: str
    created_at: str
    entries: list[VocabEntrySchema]

    model_config = {"from_attributes": True}


class VocabListCreateRequest(BaseModel):
    name: str = Field(..., min_length=1)
    source_lang: str = Field(..., min_length=1, description="Language of the terms")
    target_lang: str = Field(..., min_length=1, description="Language of the translations")


class VocabEntryCreateRequest(BaseModel):
    term: str = Field(..., min_length=1)
    translation: str = Field(..., min_length=1)


class VocabEntryUpdateRequest(BaseModel):
    term: str | None = Field(None, min_length=1)
    translation: str | None = Field(None, min_length=1)


class VocabPairSchema(BaseModel):
    term: str
    translation: str

    model_config = {"from_attributes": True}


class VocabTextRequest(BaseModel):
    text: str = Field(..., description="Pasted vocabulary, one pair per line")


class VocabParseResponse(BaseModel):
    pairs: list[VocabPairSchema]


class VocabImportResponse(BaseModel):
    added: int


class VocabScanResponse(BaseModel):
    added: int
    source: str | None = Field(None, description="Strategy that recognized the words")
    comment: str = Field(..., description="Remark on the uploaded picture")
    message: str | None = None

    model_config = {"from_attributes": True}


class VocabQuizRequest(BaseModel):
    mode: QuizMode = QuizMode.MULTIPLE_CHOICE
    direction: QuizDirection = QuizDirection.SOURCE_TARGET
