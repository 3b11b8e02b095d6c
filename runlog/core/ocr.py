"""Tesseract-backed image-to-text recognizer."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import pytesseract
from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)


class RecognitionError(RuntimeError):
    """Raised when an image is missing or text recognition fails."""


class TesseractRecognizer:
    """Recognize screenshot text through the tesseract binary."""

    def __init__(self, lang: str = "eng", tesseract_cmd: Optional[str] = None) -> None:
        self.lang = lang
        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "TesseractRecognizer":
        ocr_cfg = config.get("ocr", {})
        return cls(
            lang=str(ocr_cfg.get("lang") or "eng"),
            tesseract_cmd=str(ocr_cfg.get("tesseract_cmd") or "") or None,
        )

    def recognize_text(self, image_path: Path) -> str:
        logger.info("Processing image: %s", image_path)
        if not image_path.is_file():
            raise RecognitionError(f"Image file not found: {image_path}")

        try:
            with Image.open(image_path) as image:
                text = pytesseract.image_to_string(image, lang=self.lang)
        except (pytesseract.TesseractError, pytesseract.TesseractNotFoundError) as exc:
            raise RecognitionError(f"Error reading text from image: {exc}") from exc
        except (OSError, UnidentifiedImageError) as exc:
            raise RecognitionError(f"Error reading image {image_path}: {exc}") from exc

        logger.debug("Text extracted from image: %s", text)
        return text
