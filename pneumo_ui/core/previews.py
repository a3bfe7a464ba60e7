"""Preview pipeline: turn selected files into display-ready data URLs.

Decoding runs concurrently and may finish in any order. ``build_previews``
joins every decode and returns the previews in selection order, so callers
only ever see a complete collection. Each slot records either a data URL or
the reason it failed; a bad file never holds the rest of the batch back.
"""

from __future__ import annotations

import asyncio
import base64
import io
import logging
from typing import Awaitable, Callable, Sequence

from PIL import Image, UnidentifiedImageError

from pneumo_ui.config import DEFAULT_PREVIEW_MAX_SIZE
from pneumo_ui.core.contracts import Preview, SelectedFile

logger = logging.getLogger(__name__)

DecodeFn = Callable[[SelectedFile], Awaitable[str]]


def to_data_url(file: SelectedFile, max_size: int = DEFAULT_PREVIEW_MAX_SIZE) -> str:
    """Decode ``file`` and return a PNG thumbnail as a data URL.

    Raises ``ValueError`` when the bytes are not a readable image.
    """
    try:
        img = Image.open(io.BytesIO(file.data))
        img.load()
    except (UnidentifiedImageError, OSError) as exc:
        raise ValueError(f"Cannot decode image '{file.name}'") from exc

    if img.mode not in ("L", "RGB", "RGBA"):
        img = img.convert("RGB")
    img.thumbnail((max_size, max_size))

    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    image_b64 = base64.b64encode(buffer.getvalue()).decode("ascii")
    return f"data:image/png;base64,{image_b64}"


async def decode_preview(file: SelectedFile, max_size: int = DEFAULT_PREVIEW_MAX_SIZE) -> str:
    return await asyncio.to_thread(to_data_url, file, max_size)


async def _decode_one(
    index: int,
    file: SelectedFile,
    decode: DecodeFn,
    timeout: float | None,
) -> Preview:
    try:
        if timeout is None:
            data_url = await decode(file)
        else:
            data_url = await asyncio.wait_for(decode(file), timeout)
    except asyncio.TimeoutError:
        logger.warning("Preview decode timed out for %s", file.name)
        return Preview(index=index, filename=file.name, error="timed out")
    except Exception as exc:
        logger.warning("Preview decode failed for %s: %s", file.name, exc)
        return Preview(index=index, filename=file.name, error=str(exc) or type(exc).__name__)
    return Preview(index=index, filename=file.name, data_url=data_url)


async def build_previews(
    files: Sequence[SelectedFile],
    *,
    decode: DecodeFn = decode_preview,
    timeout: float | None = None,
) -> list[Preview]:
    """Decode every file and return one ``Preview`` per file, same order.

    Args:
        files: Selected files, in selection order.
        decode: Async decoder returning a data URL (``decode_preview`` by default).
        timeout: Optional per-file limit in seconds. ``None`` waits indefinitely.
    """
    if not files:
        return []
    tasks = [_decode_one(i, f, decode, timeout) for i, f in enumerate(files)]
    return list(await asyncio.gather(*tasks))
