from __future__ import annotations

import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator


class Settings(BaseModel):
    # Message handling
    max_message_length: int = Field(default=500, ge=1, description="Longest message the machine accepts")
    whitespace_filler: str = Field(default="X", description="Letter substituted for whitespace")

    # Radio framing
    receiver: str = Field(default="REC")
    sender: str = Field(default="S")
    identification_group: str = Field(default="ABCDE", min_length=5, max_length=5)

    # Logging
    log_level: str = Field(default="INFO")

    # Reproducibility
    global_seed: int = Field(default=1337)

    @field_validator("whitespace_filler")
    @classmethod
    def _filler_letter(cls, v: str) -> str:
        from .machine.alphabet import ALPHABET

        v = v.upper()
        if len(v) != 1 or v not in ALPHABET:
            raise ValueError(f"whitespace_filler must be a single letter from {ALPHABET}")
        return v

    @field_validator("identification_group")
    @classmethod
    def _ident_letters(cls, v: str) -> str:
        from .machine.alphabet import ALPHABET

        v = v.upper()
        if any(c not in ALPHABET for c in v):
            raise ValueError(f"identification_group must use letters from {ALPHABET}")
        return v

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        return v.upper()


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    # Load .env if present
    load_dotenv()

    return Settings(
        max_message_length=int(os.getenv("ENIGMA_MAX_MESSAGE_LENGTH", "500")),
        whitespace_filler=os.getenv("ENIGMA_WHITESPACE_FILLER", "X"),
        receiver=os.getenv("ENIGMA_RECEIVER", "REC"),
        sender=os.getenv("ENIGMA_SENDER", "S"),
        identification_group=os.getenv("ENIGMA_IDENTIFICATION_GROUP", "ABCDE"),
        log_level=os.getenv("ENIGMA_LOG_LEVEL", "INFO"),
        global_seed=int(os.getenv("GLOBAL_SEED", "1337")),
    )
