from dependency_injector import containers, providers

from fynix.application.common.fallback_pipeline import FallbackPipeline
from fynix.application.feed.feed_fact_generator import FeedFactGenerator
from fynix.application.feed.feed_refresh_loop import FeedRefreshLoop
from fynix.application.habits.complete_habit_use_case import CompleteHabitUseCase
from fynix.application.learning.quiz_feedback_service import QuizFeedbackService
from fynix.application.learning.strategies.material_quiz_strategies import (
    AIMaterialQuizStrategy,
    LocalMaterialQuizStrategy,
)
from fynix.application.learning.strategies.transcription_strategies import (
    OCRTranscriptionStrategy,
    VisionTranscriptionStrategy,
)
from fynix.application.learning.strategies.vocab_quiz_strategies import (
    AIVocabQuizStrategy,
    LocalVocabQuizStrategy,
)
from fynix.application.learning.use_cases.answer_quiz_use_case import AnswerQuizUseCase
from fynix.application.learning.use_cases.material_quiz_use_case import MaterialQuizUseCase
from fynix.application.learning.use_cases.vocab_quiz_use_case import VocabQuizUseCase
from fynix.application.money.record_money_entry_use_case import RecordMoneyEntryUseCase
from fynix.application.state.state_store import StateStore
from fynix.application.vocabulary.strategies.scan_strategies import (
    OCRVocabScanStrategy,
    VisionVocabScanStrategy,
)
from fynix.application.vocabulary.use_cases.import_vocab_text_use_case import (
    ImportVocabTextUseCase,
)
from fynix.application.vocabulary.use_cases.vocab_scan_use_case import VocabScanUseCase
from fynix.config import get_settings
from fynix.infrastructure.ai.ai_service import AIService, AIVisionService
from fynix.infrastructure.ocr.image_comment_service import ImageCommentService
from fynix.infrastructure.ocr.tesseract_ocr_service import TesseractOCRService
from fynix.infrastructure.persistence.database import (
    create_database_engine,
    create_session_factory,
)
from fynix.infrastructure.persistence.key_value_backends import SqlAlchemyKeyValueBackend
from fynix.infrastructure.persistence.state_repository import StateRepository


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    settings = providers.Singleton(get_settings)

    # Persistence
    engine = providers.Singleton(
        create_database_engine, database_url=settings.provided.DATABASE_URL
    )
    session_factory = providers.Singleton(create_session_factory, engine=engine)
    key_value_backend = providers.Singleton(
        SqlAlchemyKeyValueBackend, session_factory=session_factory
    )
    state_repository = providers.Singleton(StateRepository, backend=key_value_backend)
    state_store = providers.Singleton(StateStore, repository=state_repository)

    # External collaborators
    ai_service = providers.Singleton(
        AIService, retry_delay_seconds=settings.provided.AI_RETRY_DELAY_SECONDS
    )
    vision_service = providers.Singleton(AIVisionService)
    ocr_service = providers.Singleton(
        TesseractOCRService, default_language=settings.provided.OCR_LANGUAGE
    )
    image_comment_service = providers.Singleton(ImageCommentService)

    # Strategy pipelines, AI first and local fallback last
    vocab_quiz_pipeline = providers.Factory(
        FallbackPipeline,
        strategies=providers.List(
            providers.Factory(AIVocabQuizStrategy, ai_service=ai_service),
            providers.Factory(LocalVocabQuizStrategy),
        ),
    )
    material_quiz_pipeline = providers.Factory(
        FallbackPipeline,
        strategies=providers.List(
            providers.Factory(AIMaterialQuizStrategy, ai_service=ai_service),
            providers.Factory(LocalMaterialQuizStrategy),
        ),
    )
    transcription_pipeline = providers.Factory(
        FallbackPipeline,
        strategies=providers.List(
            providers.Factory(VisionTranscriptionStrategy, vision_service=vision_service),
            providers.Factory(OCRTranscriptionStrategy, ocr_service=ocr_service),
        ),
    )
    vocab_scan_pipeline = providers.Factory(
        FallbackPipeline,
        strategies=providers.List(
            providers.Factory(VisionVocabScanStrategy, vision_service=vision_service),
            providers.Factory(OCRVocabScanStrategy, ocr_service=ocr_service),
        ),
    )

    # Habits and money
    complete_habit_use_case = providers.Factory(CompleteHabitUseCase, store=state_store)
    record_money_entry_use_case = providers.Factory(RecordMoneyEntryUseCase, store=state_store)

    # Learning
    vocab_quiz_use_case = providers.Factory(
        VocabQuizUseCase, store=state_store, pipeline=vocab_quiz_pipeline
    )
    material_quiz_use_case = providers.Factory(
        MaterialQuizUseCase,
        store=state_store,
        quiz_pipeline=material_quiz_pipeline,
        transcription_pipeline=transcription_pipeline,
    )
    answer_quiz_use_case = providers.Factory(AnswerQuizUseCase, store=state_store)
    quiz_feedback_service = providers.Factory(QuizFeedbackService, ai_service=ai_service)

    # Vocabulary
    import_vocab_text_use_case = providers.Factory(ImportVocabTextUseCase, store=state_store)
    vocab_scan_use_case = providers.Factory(
        VocabScanUseCase,
        store=state_store,
        pipeline=vocab_scan_pipeline,
        image_comment_service=image_comment_service,
    )

    # Feed
    feed_fact_generator = providers.Factory(FeedFactGenerator, ai_service=ai_service)
    feed_refresh_loop = providers.Singleton(
        FeedRefreshLoop,
        store=state_store,
        generator=feed_fact_generator,
        interval_seconds=settings.provided.FEED_REFRESH_INTERVAL_SECONDS,
    )


container = Container()
