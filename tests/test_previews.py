import asyncio
import base64
import io

import pytest
from PIL import Image

from helpers import make_image, make_images, png_bytes
from pneumo_ui.core.contracts import SelectedFile
from pneumo_ui.core.previews import build_previews, decode_preview, to_data_url


def test_to_data_url_produces_png_thumbnail():
    f = make_image("big.png", png_bytes(size=(1024, 256)))
    url = to_data_url(f, max_size=128)

    assert url.startswith("data:image/png;base64,")
    img = Image.open(io.BytesIO(base64.b64decode(url.split(",", 1)[1])))
    assert max(img.size) == 128


def test_to_data_url_rejects_garbage():
    with pytest.raises(ValueError, match="broken.png"):
        to_data_url(SelectedFile("broken.png", b"not an image", "image/png"))


@pytest.mark.asyncio
async def test_decode_preview_runs_real_decoder():
    url = await decode_preview(make_image())
    assert url.startswith("data:image/png;base64,")


@pytest.mark.asyncio
async def test_build_previews_keeps_selection_order_when_completions_reverse():
    files = make_images(4)
    completed = []

    async def slow_first(file: SelectedFile) -> str:
        idx = int(file.name.split("_")[1].split(".")[0])
        await asyncio.sleep(0.01 * (4 - idx))
        completed.append(idx)
        return f"url-{idx}"

    previews = await build_previews(files, decode=slow_first)

    assert completed == [3, 2, 1, 0]
    assert [p.index for p in previews] == [0, 1, 2, 3]
    assert [p.data_url for p in previews] == ["url-0", "url-1", "url-2", "url-3"]
    assert all(p.ok for p in previews)


@pytest.mark.asyncio
async def test_build_previews_records_failures_without_blocking():
    files = make_images(3)

    async def flaky(file: SelectedFile) -> str:
        if file.name == "xray_1.png":
            raise ValueError("corrupt")
        return "ok"

    previews = await build_previews(files, decode=flaky)

    assert len(previews) == 3
    assert previews[0].ok and previews[2].ok
    assert not previews[1].ok
    assert previews[1].error == "corrupt"
    assert previews[1].filename == "xray_1.png"


@pytest.mark.asyncio
async def test_build_previews_timeout_marks_slot_failed():
    files = make_images(2)

    async def stall_second(file: SelectedFile) -> str:
        if file.name == "xray_1.png":
            await asyncio.sleep(10)
        return "ok"

    previews = await build_previews(files, decode=stall_second, timeout=0.05)

    assert previews[0].ok
    assert previews[1].error == "timed out"


@pytest.mark.asyncio
async def test_build_previews_empty():
    assert await build_previews([]) == []
