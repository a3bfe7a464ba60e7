"""Small builders shared by the test modules."""

import io

from PIL import Image

from pneumo_ui.core.contracts import SelectedFile


def png_bytes(size=(8, 8), color=(128, 128, 128)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


def make_image(name: str = "xray.png", data: bytes | None = None) -> SelectedFile:
    return SelectedFile(name=name, data=data if data is not None else png_bytes(), mime_type="image/png")


def make_images(n: int, prefix: str = "xray") -> list[SelectedFile]:
    return [make_image(f"{prefix}_{i}.png") for i in range(n)]


async def fake_decode(file: SelectedFile) -> str:
    return f"data:test;{file.name}"
