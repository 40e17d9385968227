"""FastAPI server exposing the quiz library for remote editing tools."""

from __future__ import annotations

from threading import Thread

from fastapi import Depends, FastAPI, HTTPException, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import uvicorn

from speed_quiz.constants.network_constants import API_PREFIX, DEFAULT_HOST, DEFAULT_PORT
from speed_quiz.core.exceptions import InvalidQuizError, QuizNotFoundError
from speed_quiz.core.models import Quiz
from speed_quiz.core.quiz_manager import QuizManager
from speed_quiz.core.quiz_schema import QuizPayload, QuizUpdatePayload


def quiz_to_dict(quiz: Quiz) -> dict[str, object]:
    return {
        "id": quiz.id,
        "title": quiz.title,
        "timePerQuiz": quiz.time_per_quiz,
        "passLimit": quiz.pass_limit,
        "groups": [
            {"id": group.id, "name": group.name, "words": list(group.words)} for group in quiz.groups
        ],
    }


def _get_quiz_manager_dependency(quiz_manager: QuizManager):
    def dependency() -> QuizManager:
        return quiz_manager

    return dependency


def create_api_app(quiz_manager: QuizManager) -> FastAPI:
    """Create a FastAPI application wired to the provided quiz manager."""
    app = FastAPI(title="Speed Quiz API", version="0.1.0")
    quiz_manager_dep = _get_quiz_manager_dependency(quiz_manager)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        first = exc.errors()[0] if exc.errors() else {}
        field = ".".join(str(part) for part in first.get("loc", ())[1:])
        return JSONResponse(
            status_code=400,
            content={"message": first.get("msg", "Invalid request."), "field": field or None},
        )

    @app.get(f"{API_PREFIX}/quizzes")
    def list_quizzes(manager: QuizManager = Depends(quiz_manager_dep)) -> list[dict[str, object]]:
        return [quiz_to_dict(quiz) for quiz in manager.list_quizzes()]

    @app.get(f"{API_PREFIX}/quizzes/{{quiz_id}}")
    def get_quiz(quiz_id: int, manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        quiz = manager.get_quiz(quiz_id)
        if quiz is None:
            raise HTTPException(status_code=404, detail="Quiz not found")
        return quiz_to_dict(quiz)

    @app.post(f"{API_PREFIX}/quizzes", status_code=201)
    def create_quiz(
        payload: QuizPayload,
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, object]:
        try:
            quiz = manager.create_quiz(payload.to_input())
        except InvalidQuizError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return quiz_to_dict(quiz)

    @app.put(f"{API_PREFIX}/quizzes/{{quiz_id}}")
    def update_quiz(
        quiz_id: int,
        payload: QuizUpdatePayload,
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, object]:
        try:
            quiz = manager.update_quiz(
                quiz_id,
                title=payload.title,
                groups=payload.group_inputs(),
                time_per_quiz=payload.time_per_quiz,
                pass_limit=payload.pass_limit,
            )
        except QuizNotFoundError as exc:
            raise HTTPException(status_code=404, detail="Quiz not found") from exc
        except InvalidQuizError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return quiz_to_dict(quiz)

    @app.delete(f"{API_PREFIX}/quizzes/{{quiz_id}}", status_code=204)
    def delete_quiz(quiz_id: int, manager: QuizManager = Depends(quiz_manager_dep)) -> Response:
        try:
            manager.delete_quiz(quiz_id)
        except QuizNotFoundError as exc:
            raise HTTPException(status_code=404, detail="Quiz not found") from exc
        return Response(status_code=204)

    return app


def start_api_server(
    quiz_manager: QuizManager,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> Thread:
    """Start the FastAPI server in a background daemon thread."""
    app = create_api_app(quiz_manager)
    config = uvicorn.Config(app=app, host=host, port=port, log_level="info")
    server = uvicorn.Server(config)

    def run_server() -> None:
        server.run()

    thread = Thread(target=run_server, name="QuizApiServer", daemon=True)
    thread.start()
    return thread
