import io
import sys
from pathlib import Path

import pytest
from PIL import Image

# Add src to sys.path so we can import a4king
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from a4king.core.models import ImageEntity, ImageStatus  # noqa: E402


# Common test fixtures
@pytest.fixture
def make_image():
    """Factory for ImageEntity objects backed by solid-colour PIL images."""
    counter = {"n": 0}

    def _create(
        width: int = 100,
        height: int = 100,
        *,
        status: ImageStatus = ImageStatus.PLACED,
        color: str = "red",
        image_id: str | None = None,
        name: str | None = None,
    ) -> ImageEntity:
        counter["n"] += 1
        n = counter["n"]
        return ImageEntity(
            id=image_id or f"img{n}",
            name=name or f"photo_{n}.png",
            content=Image.new("RGB", (width, height), color=color),
            width=width,
            height=height,
            status=status,
        )

    return _create


@pytest.fixture
def png_bytes():
    """Encoded 200x100 PNG."""
    buf = io.BytesIO()
    Image.new("RGB", (200, 100), color="blue").save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def sample_image(tmp_path: Path):
    """Create a simple test image on disk."""
    img = Image.new("RGB", (200, 100), color="white")
    img_path = tmp_path / "sample.png"
    img.save(img_path)
    return img_path
