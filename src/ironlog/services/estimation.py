"""AI-assisted nutrition estimation and workout parsing."""

import base64
import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol, TypeVar

from pydantic import BaseModel, ValidationError

from ironlog.domain.estimates import NutritionEstimate, WorkoutEstimate

NUTRITION_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "food_name": {"type": "string"},
        "calories": {"type": "number", "minimum": 0},
        "protein": {"type": "number", "minimum": 0},
        "carbs": {"type": "number", "minimum": 0},
        "fats": {"type": "number", "minimum": 0},
        "serving_size": {"type": "string"},
        "confidence": {"type": "number", "minimum": 0.0, "maximum": 1.0},
    },
    "required": [
        "food_name",
        "calories",
        "protein",
        "carbs",
        "fats",
        "serving_size",
        "confidence",
    ],
    "additionalProperties": False,
}

WORKOUT_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "exercises": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "body_part": {"type": "string"},
                    "sets": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "properties": {
                                "reps": {"type": "integer", "minimum": 0},
                                "weight": {"type": "number", "minimum": 0},
                                "weight_unit": {
                                    "type": "string",
                                    "enum": ["kg", "lbs"],
                                },
                                "set_type": {
                                    "type": "string",
                                    "enum": [
                                        "warmup",
                                        "working",
                                        "dropset",
                                        "failure",
                                    ],
                                },
                            },
                            "required": [
                                "reps",
                                "weight",
                                "weight_unit",
                                "set_type",
                            ],
                            "additionalProperties": False,
                        },
                    },
                },
                "required": ["name", "body_part", "sets"],
                "additionalProperties": False,
            },
        }
    },
    "required": ["exercises"],
    "additionalProperties": False,
}

BODY_PARTS = (
    "Chest/Back/Shoulders/Biceps/Triceps/Quads/Hamstrings/Glutes/Calves/"
    "Abs/Core/Forearms/Traps/Cardio/Full Body"
)

ModelT = TypeVar("ModelT", bound=BaseModel)

_logger = logging.getLogger(__name__)


class MissingCredentialError(RuntimeError):
    """Raised when an AI feature is used without an API key."""


class EstimationError(RuntimeError):
    """Raised when the AI reply cannot be turned into an estimate."""


class EstimationClient(Protocol):
    """Interface for structured LLM extraction."""

    async def extract(
        self,
        *,
        prompt: str,
        schema_name: str,
        schema: dict[str, object],
        image_data_url: str | None = None,
    ) -> dict[str, object] | str:
        """Return structured data, or raw text when the model ignored the schema."""


@dataclass
class EstimationService:
    """Service that prepares estimation prompts and validates results."""

    client_factory: Callable[[str], EstimationClient]
    default_api_key: str | None = None

    async def estimate_food(
        self,
        *,
        api_key: str | None,
        description: str | None = None,
        image_bytes: bytes | None = None,
    ) -> NutritionEstimate:
        """Estimate macros from a meal description, a photo, or both."""
        if not description and not image_bytes:
            raise ValueError("A description or an image is required")
        client = self._client(api_key)
        if image_bytes:
            prompt = (
                "You are a nutrition expert. Look at this food photo and estimate "
                "the macronutrients of the meal.\n"
            )
            if description:
                prompt += f'The user also described it as: "{description}"\n'
            prompt += (
                "Return food_name, calories, protein (grams), carbs (grams), "
                "fats (grams), an estimated serving_size and your confidence (0-1). "
                "Be as accurate as possible."
            )
            image_data_url = _to_data_url(image_bytes)
        else:
            prompt = (
                "You are a nutrition expert. Estimate the macronutrients of the "
                "following food/meal described by the user.\n\n"
                f'User description: "{description}"\n\n'
                "Return food_name, calories, protein (grams), carbs (grams), "
                "fats (grams), an estimated serving_size and your confidence (0-1). "
                "Be as accurate as possible. If multiple items, sum them up."
            )
            image_data_url = None
        raw = await client.extract(
            prompt=prompt,
            schema_name="nutrition_estimate",
            schema=NUTRITION_SCHEMA,
            image_data_url=image_data_url,
        )
        return _validate(NutritionEstimate, raw)

    async def parse_workout(
        self, *, api_key: str | None, description: str
    ) -> WorkoutEstimate:
        """Parse a free-text workout into exercises and sets."""
        client = self._client(api_key)
        prompt = (
            "You are a fitness expert. Parse the following workout description "
            "into structured exercise data.\n\n"
            f'User description: "{description}"\n\n'
            "Use standard gym exercise names. For body_part pick the primary "
            f"muscle group ({BODY_PARTS}). Each set has reps, weight, "
            'weight_unit ("lbs" or "kg") and set_type '
            '("working", "warmup", "dropset" or "failure").'
        )
        raw = await client.extract(
            prompt=prompt,
            schema_name="workout_estimate",
            schema=WORKOUT_SCHEMA,
        )
        return _validate(WorkoutEstimate, raw)

    def _client(self, api_key: str | None) -> EstimationClient:
        credential = api_key or self.default_api_key
        if not credential:
            raise MissingCredentialError("An AI API key is required for estimates")
        return self.client_factory(credential)


def _validate(model: type[ModelT], raw: dict[str, object] | str) -> ModelT:
    """Validate a structured reply, accepting JSON text wrapped in code fences."""
    try:
        payload = json.loads(_strip_code_fences(raw)) if isinstance(raw, str) else raw
        return model.model_validate(payload)
    except (json.JSONDecodeError, ValidationError) as exc:
        _logger.warning("AI estimate rejected: %s", exc)
        raise EstimationError("AI returned an unreadable estimate") from exc


def _strip_code_fences(text: str) -> str:
    """Remove markdown code fences around a JSON reply."""
    cleaned = text.strip()
    cleaned = cleaned.replace("```json", "").replace("```", "")
    return cleaned.strip()


def _to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
