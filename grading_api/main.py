"""
FastAPI backend for server-side answer grading.

Layers:
- Service layer for grading logic (tutormath engine)
- Structured logging
- Error handlers with a uniform error body
- Dependency injection
"""

from contextlib import asynccontextmanager
from typing import Any, List, Optional

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from tutormath import AnswerType, Confidence, MatchingMode, MatchType, get_settings as get_engine_settings

from .core import get_logger, register_error_handlers, settings, setup_logging
from .models import AnswerComparison, AttemptSubmission, GradedAttempt, GradingAudit, NormalizedAnswer, StudentAnswer
from .services import GradingService, get_grading_service

# Setup logging
setup_logging()
logger = get_logger(__name__)


def _matching_mode() -> MatchingMode:
    return settings.DEFAULT_MATCHING_MODE or get_engine_settings().MATCHING_MODE


# Lifecycle management
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    logger.info(
        "Starting grading API",
        extra_data={
            "environment": settings.ENVIRONMENT,
            "debug": settings.DEBUG,
            "matching_mode": _matching_mode().value,
        },
    )
    yield
    logger.info("Shutting down grading API")


app = FastAPI(
    title=settings.APP_NAME,
    description="Server-side answer validation for math tutoring",
    version=settings.APP_VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan,
)

register_error_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=settings.CORS_ALLOW_METHODS,
    allow_headers=settings.CORS_ALLOW_HEADERS,
)


# Dependency injection
def get_grading_service_dep() -> GradingService:
    """Get grading service instance"""
    return get_grading_service(settings.DEFAULT_MATCHING_MODE)


# API Request/Response Models
class ValidateAttemptRequest(BaseModel):
    """Request to validate a student's answer"""

    question_id: Optional[str] = Field(None, description="Question identifier, for logs and errors")
    answer_type: AnswerType
    correct_answer: Any = Field(None, description="Stored correct answer: text, number, list or spec object")
    answer: StudentAnswer = Field(None, description="Student answer; a list for fill-blank or matching")
    client_is_correct: Optional[bool] = Field(None, description="Client-side verdict; recorded, never trusted")
    matching_mode: Optional[MatchingMode] = None

    def to_domain(self) -> AttemptSubmission:
        """Convert request to domain model"""
        return AttemptSubmission(
            question_id=self.question_id,
            answer_type=self.answer_type,
            correct_answer=self.correct_answer,
            answer=self.answer,
            client_is_correct=self.client_is_correct,
            matching_mode=self.matching_mode,
        )


class AuditResponse(BaseModel):
    """Audit block of a validation response"""

    server_validated: bool
    client_claimed_correct: Optional[bool]
    client_server_agree: Optional[bool]

    @classmethod
    def from_domain(cls, audit: GradingAudit) -> "AuditResponse":
        return cls(
            server_validated=audit.server_validated,
            client_claimed_correct=audit.client_claimed_correct,
            client_server_agree=audit.client_server_agree,
        )


class ValidateAttemptResponse(BaseModel):
    """Validation response"""

    is_correct: bool
    match_type: MatchType
    confidence: Confidence
    blanks_correct: Optional[int] = None
    blanks_total: Optional[int] = None
    matches_correct: Optional[int] = None
    matches_total: Optional[int] = None
    audit: AuditResponse

    @classmethod
    def from_domain(cls, graded: GradedAttempt) -> "ValidateAttemptResponse":
        """Convert domain model to response"""
        result = graded.result
        return cls(
            is_correct=result.is_correct,
            match_type=result.match_type,
            confidence=result.confidence,
            blanks_correct=result.blanks_correct,
            blanks_total=result.blanks_total,
            matches_correct=result.matches_correct,
            matches_total=result.matches_total,
            audit=AuditResponse.from_domain(graded.audit),
        )


class CompareRequest(BaseModel):
    """Request to compare two answers"""

    answer: str = Field(..., description="Answer to check")
    correct_answer: str = Field(..., description="Reference answer")
    alternates: List[str] = Field(default_factory=list, description="Other accepted answers")
    matching_mode: Optional[MatchingMode] = None


class NormalizeRequest(BaseModel):
    """Request to normalize an answer"""

    answer: str


# API Routes

@app.get("/")
async def read_root():
    """API root endpoint"""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "endpoints": {
            "validate": f"{settings.API_PREFIX}/attempts/validate",
            "compare": f"{settings.API_PREFIX}/answers/compare",
            "normalize": f"{settings.API_PREFIX}/answers/normalize",
            "health": "/health",
        },
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "matching_mode": _matching_mode().value,
    }


@app.post(f"{settings.API_PREFIX}/attempts/validate", response_model=ValidateAttemptResponse)
def validate_attempt(
    request: ValidateAttemptRequest,
    service: GradingService = Depends(get_grading_service_dep),
):
    """
    Validate a student's answer on the server.

    Args:
        request: Answer type, stored correct answer and student answer

    Returns:
        Verdict with match type, confidence and the audit block
    """
    graded = service.validate_attempt(request.to_domain())
    return ValidateAttemptResponse.from_domain(graded)


@app.post(f"{settings.API_PREFIX}/answers/compare", response_model=AnswerComparison)
def compare_answers(
    request: CompareRequest,
    service: GradingService = Depends(get_grading_service_dep),
):
    """Compare an answer with a reference answer (tutor review tooling)"""
    logger.info("Comparing answers", extra_data={"num_alternates": len(request.alternates)})
    return service.compare_answers(request.answer, request.correct_answer, request.alternates, request.matching_mode)


@app.post(f"{settings.API_PREFIX}/answers/normalize", response_model=NormalizedAnswer)
def normalize_answer(
    request: NormalizeRequest,
    service: GradingService = Depends(get_grading_service_dep),
):
    """Normalized and display forms of an answer"""
    return service.normalize(request.answer)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "grading_api.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
