"""Sampling configuration for the local model."""

from dataclasses import dataclass

from config.settings import Settings


@dataclass(frozen=True)
class ModelConfig:
    model_id: str
    temperature: float
    max_tokens: int  # sent to Ollama as num_predict

    @classmethod
    def from_settings(cls, settings: Settings) -> "ModelConfig":
        return cls(
            model_id=settings.ollama_model,
            temperature=settings.chat_temperature,
            max_tokens=settings.chat_max_tokens,
        )

    def options(self) -> dict[str, float | int]:
        return {"temperature": self.temperature, "num_predict": self.max_tokens}
