from __future__ import annotations

from pathlib import Path

import pytest
import pytesseract
from PIL import Image

from runlog.core.ocr import RecognitionError, TesseractRecognizer


@pytest.fixture()
def image_path(tmp_path: Path) -> Path:
    path = tmp_path / "summary.png"
    Image.new("RGB", (16, 16), color="white").save(path)
    return path


def test_recognize_text_passes_language(monkeypatch: pytest.MonkeyPatch, image_path: Path) -> None:
    seen = {}

    def fake_image_to_string(image, lang=None):  # type: ignore[no-untyped-def]
        seen["size"] = image.size
        seen["lang"] = lang
        return "Workout Time Distance"

    monkeypatch.setattr("runlog.core.ocr.pytesseract.image_to_string", fake_image_to_string)

    text = TesseractRecognizer(lang="deu").recognize_text(image_path)
    assert text == "Workout Time Distance"
    assert seen == {"size": (16, 16), "lang": "deu"}


def test_recognize_text_missing_file(tmp_path: Path) -> None:
    with pytest.raises(RecognitionError):
        TesseractRecognizer().recognize_text(tmp_path / "missing.png")


def test_recognize_text_not_an_image(tmp_path: Path) -> None:
    path = tmp_path / "notes.png"
    path.write_text("not really a png")
    with pytest.raises(RecognitionError):
        TesseractRecognizer().recognize_text(path)


def test_recognize_text_missing_tesseract(monkeypatch: pytest.MonkeyPatch, image_path: Path) -> None:
    def fake_image_to_string(image, lang=None):  # type: ignore[no-untyped-def]
        raise pytesseract.TesseractNotFoundError()

    monkeypatch.setattr("runlog.core.ocr.pytesseract.image_to_string", fake_image_to_string)
    with pytest.raises(RecognitionError, match="reading text"):
        TesseractRecognizer().recognize_text(image_path)


def test_from_config_sets_command(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(pytesseract.pytesseract, "tesseract_cmd", "tesseract")
    recognizer = TesseractRecognizer.from_config(
        {"ocr": {"lang": "eng+deu", "tesseract_cmd": "/opt/bin/tesseract"}}
    )
    assert recognizer.lang == "eng+deu"
    assert pytesseract.pytesseract.tesseract_cmd == "/opt/bin/tesseract"


def test_from_config_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(pytesseract.pytesseract, "tesseract_cmd", "tesseract")
    recognizer = TesseractRecognizer.from_config({})
    assert recognizer.lang == "eng"
    assert pytesseract.pytesseract.tesseract_cmd == "tesseract"
