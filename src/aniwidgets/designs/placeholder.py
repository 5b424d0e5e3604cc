"""Placeholder frame images drawn with Pillow."""

from io import BytesIO

from PIL import Image, ImageDraw, ImageFont

from ..constants import PLACEHOLDER_BACKGROUND, PLACEHOLDER_SIZE, PLACEHOLDER_TEXT


class PlaceholderRenderer:
    """Draws a flat placeholder frame labelled with a title and frame number."""

    def __init__(
        self,
        size: tuple[int, int] = PLACEHOLDER_SIZE,
        background: tuple[int, int, int] = PLACEHOLDER_BACKGROUND,
        text_color: tuple[int, int, int] = PLACEHOLDER_TEXT,
    ):
        """
        Initialize renderer.

        Args:
            size: Output image size in pixels
            background: Fill color
            text_color: Label color
        """
        self.width, self.height = size
        self.background = background
        self.text_color = text_color

    def render_frame(self, title: str, frame_index: int) -> Image.Image:
        img = Image.new("RGB", (self.width, self.height), self.background)
        draw = ImageDraw.Draw(img)
        self._draw_centered(draw, title, offset=-10)
        self._draw_centered(draw, f"Frame {frame_index}", offset=10)
        return img

    def render_png(self, title: str, frame_index: int) -> bytes:
        """Render a frame and encode it as PNG bytes."""
        buffer = BytesIO()
        self.render_frame(title, frame_index).save(buffer, format="png")
        return buffer.getvalue()

    def _draw_centered(self, draw: ImageDraw.ImageDraw, text: str, offset: int) -> None:
        """Draw text horizontally centered, ``offset`` pixels from the middle."""
        font = ImageFont.load_default()
        bbox = draw.textbbox((0, 0), text, font=font)
        text_width = bbox[2] - bbox[0]
        text_height = bbox[3] - bbox[1]

        x = (self.width - text_width) // 2
        y = (self.height - text_height) // 2 + offset

        draw.text((x, y), text, font=font, fill=self.text_color)
