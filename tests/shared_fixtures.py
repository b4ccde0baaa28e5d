import io
from pathlib import Path

from PIL import Image


class SharedImageFixtures:
    @classmethod
    def get_assets_dir(cls) -> Path:
        return Path(__file__).parent / "assets"

    @classmethod
    def encode(cls, image: Image.Image, image_format: str) -> bytes:
        buffer = io.BytesIO()
        image.save(buffer, format=image_format)
        return buffer.getvalue()

    @classmethod
    def load_photo_jpeg(cls) -> tuple[bytes, str]:
        image_path = cls.get_assets_dir() / "photo_800x600.jpg"

        if image_path.exists():
            return image_path.read_bytes(), "photo_800x600.jpg"
        else:
            image = Image.new("RGB", (800, 600))
            for x in range(0, 800, 40):
                for y in range(0, 600, 40):
                    color = (x % 256, y % 256, (x + y) % 256)
                    image.paste(color, (x, y, x + 40, y + 40))
            return cls.encode(image, "JPEG"), "generated_photo.jpg"

    @classmethod
    def load_transparent_png(cls) -> tuple[bytes, str]:
        image_path = cls.get_assets_dir() / "logo_rgba.png"

        if image_path.exists():
            return image_path.read_bytes(), "logo_rgba.png"
        else:
            image = Image.new("RGBA", (64, 32), color=(0, 128, 255, 0))
            image.paste((0, 128, 255, 255), (16, 8, 48, 24))
            return cls.encode(image, "PNG"), "generated_logo.png"

    @classmethod
    def load_animated_gif(cls) -> tuple[bytes, str]:
        image_path = cls.get_assets_dir() / "blink_2_frames.gif"

        if image_path.exists():
            return image_path.read_bytes(), "blink_2_frames.gif"
        else:
            frames = [Image.new("RGB", (20, 20), color=c) for c in ("red", "blue")]
            buffer = io.BytesIO()
            frames[0].save(
                buffer, format="GIF", save_all=True, append_images=frames[1:]
            )
            return buffer.getvalue(), "generated_blink.gif"

    @classmethod
    def create_image_bytes(
        cls, width: int = 10, height: int = 10, image_format: str = "PNG"
    ) -> bytes:
        image = Image.new("RGB", (width, height))

        for x in range(width):
            for y in range(height):
                r = (x * 25) % 256
                g = (y * 25) % 256
                b = ((x + y) * 25) % 256
                image.putpixel((x, y), (r, g, b))

        return cls.encode(image, image_format)


async def stream_chunks(data: bytes, chunk_size: int = 1024):
    for start in range(0, len(data), chunk_size):
        yield data[start : start + chunk_size]
