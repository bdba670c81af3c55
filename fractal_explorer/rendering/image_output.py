"""
Image export for rendered fractals.

This module saves finished surfaces as PNG, TIFF or JPEG files and embeds
the render parameters as JSON metadata, so an image records how it was made.
"""

import numpy as np
from typing import Dict, Any, Optional, Union, Tuple
from pathlib import Path
from dataclasses import dataclass, asdict, field
import json
import logging
from datetime import datetime

from PIL import Image, PngImagePlugin

from .. import __version__

logger = logging.getLogger(__name__)

METADATA_KEY = "FractalMetadata"
TIFF_DESCRIPTION_TAG = 270


@dataclass
class RenderMetadata:
    """Metadata for fractal renders."""

    fractal_type: str
    category: str
    resolution: Tuple[int, int]  # width, height
    render_time_seconds: float
    parameters: Dict[str, Any] = field(default_factory=dict)
    timestamp: str = ""
    software_version: str = __version__

    def __post_init__(self):
        """Set default timestamp if not provided."""
        if not self.timestamp:
            self.timestamp = datetime.now().isoformat()
        self.resolution = tuple(self.resolution)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RenderMetadata':
        return cls(**data)

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_json(cls, json_str: str) -> 'RenderMetadata':
        return cls.from_dict(json.loads(json_str))


class ImageExporter:
    """Image export with metadata support."""

    def __init__(self):
        self.supported_formats = {
            '.png': self._save_png,
            '.tiff': self._save_tiff,
            '.tif': self._save_tiff,
            '.jpg': self._save_jpeg,
            '.jpeg': self._save_jpeg,
        }

    def save_image(self, image: Union[Image.Image, np.ndarray], filepath: Union[str, Path],
                   metadata: Optional[RenderMetadata] = None, quality: int = 95) -> Path:
        """
        Save an image with metadata.

        Args:
            image: Pillow image or uint8 array of shape (height, width, 3 or 4)
            filepath: Output file path; the suffix selects the format
            metadata: Render metadata to embed
            quality: JPEG quality (1-100)

        Returns:
            Path of the written image
        """
        filepath = Path(filepath)
        suffix = filepath.suffix.lower()

        if suffix not in self.supported_formats:
            supported = ', '.join(self.supported_formats.keys())
            raise ValueError(f"Unsupported format '{suffix}'. Supported: {supported}")

        pil_image = self._to_pil_image(image)
        if filepath.parent and not filepath.parent.exists():
            filepath.parent.mkdir(parents=True, exist_ok=True)

        save_method = self.supported_formats[suffix]
        save_method(pil_image, filepath, metadata, quality)

        logger.info(f"Saved image: {filepath} ({pil_image.size[0]}x{pil_image.size[1]})")
        return filepath

    def _to_pil_image(self, image: Union[Image.Image, np.ndarray]) -> Image.Image:
        if isinstance(image, Image.Image):
            return image

        if image.ndim != 3 or image.shape[2] not in (3, 4):
            raise ValueError(f"Expected image array (H, W, 3) or (H, W, 4), got {image.shape}")
        if image.dtype != np.uint8:
            image = np.clip(image, 0, 255).astype(np.uint8)
        return Image.fromarray(image)

    def _save_png(self, pil_image: Image.Image, filepath: Path,
                  metadata: Optional[RenderMetadata], quality: int) -> None:
        pnginfo = PngImagePlugin.PngInfo()

        if metadata:
            pnginfo.add_text("Title", f"Fractal: {metadata.fractal_type}")
            pnginfo.add_text("Software", f"fractal-explorer v{metadata.software_version}")
            pnginfo.add_text("Creation Time", metadata.timestamp)
            pnginfo.add_itxt(METADATA_KEY, metadata.to_json())

        pil_image.save(filepath, "PNG", pnginfo=pnginfo)

    def _save_tiff(self, pil_image: Image.Image, filepath: Path,
                   metadata: Optional[RenderMetadata], quality: int) -> None:
        save_kwargs = {'format': 'TIFF', 'compression': 'tiff_lzw'}
        if metadata:
            save_kwargs['tiffinfo'] = {TIFF_DESCRIPTION_TAG: metadata.to_json()}
        pil_image.save(filepath, **save_kwargs)

    def _save_jpeg(self, pil_image: Image.Image, filepath: Path,
                   metadata: Optional[RenderMetadata], quality: int) -> None:
        # JPEG has no alpha channel and no room for the metadata; it goes in a companion file
        pil_image.convert('RGB').save(filepath, "JPEG", quality=quality, optimize=True)

        if metadata:
            json_path = filepath.with_suffix('.json')
            json_path.write_text(metadata.to_json(), encoding='utf-8')
            logger.info(f"Saved metadata: {json_path}")

    def extract_metadata_from_image(self, filepath: Union[str, Path]) -> Optional[RenderMetadata]:
        """
        Read metadata back from a saved image.

        Args:
            filepath: Path to image file

        Returns:
            Extracted metadata or None when the image carries none
        """
        filepath = Path(filepath)

        with Image.open(filepath) as img:
            text = getattr(img, 'text', None)
            if text and METADATA_KEY in text:
                return RenderMetadata.from_json(text[METADATA_KEY])

            tags = getattr(img, 'tag_v2', None)
            if tags is not None and TIFF_DESCRIPTION_TAG in tags:
                return RenderMetadata.from_json(tags[TIFF_DESCRIPTION_TAG])

        json_path = filepath.with_suffix('.json')
        if filepath.suffix.lower() in ('.jpg', '.jpeg') and json_path.exists():
            return RenderMetadata.from_json(json_path.read_text(encoding='utf-8'))

        return None
