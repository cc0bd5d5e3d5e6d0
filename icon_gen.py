"""Generate the system-tray icon (64×64 PIL Image, in-memory)."""

from datetime import date

from PIL import Image, ImageDraw, ImageFont


def create_icon_image(day: date | None = None) -> Image.Image:
    """Return a 64×64 RGBA image: a calendar sheet showing the day of month."""
    size = 64
    img = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    draw = ImageDraw.Draw(img)

    # Sheet with a blue binding strip on top
    draw.rectangle((2, 6, size - 3, size - 3), fill="white", outline="#333333", width=2)
    draw.rectangle((2, 6, size - 3, 18), fill="#0078D4")

    text = str((day or date.today()).day)
    area_top, area_h = 20, size - 24

    # Find the largest font size that fits below the strip
    font_size = 60
    font = None
    while font_size > 10:
        try:
            font = ImageFont.truetype("segoeuib.ttf", font_size)
        except OSError:
            font = ImageFont.load_default()
            break
        bbox = draw.textbbox((0, 0), text, font=font)
        if bbox[2] - bbox[0] <= size - 10 and bbox[3] - bbox[1] <= area_h:
            break
        font_size -= 1

    # Centre the visible pixels in the area below the strip
    bbox = draw.textbbox((0, 0), text, font=font)
    x = (size - (bbox[2] - bbox[0])) / 2 - bbox[0]
    y = area_top + (area_h - (bbox[3] - bbox[1])) / 2 - bbox[1]
    draw.text((x, y), text, fill="black", font=font)

    return img
