import numpy as np

# monochrome framebuffer - numpy array of 0/1 pixels, one byte per pixel

class Frame:

    def __init__(self, width: int = 128, height: int = 32):
        self.width = width
        self.height = height
        # stored as (height, width) so rows index first
        self.pixels = np.zeros((height, width), dtype=np.uint8)

    def set_pixel(self, x: int, y: int, color: int):
        """Sets pixel (x, y) on (color != 0) or off, ignoring out-of-bounds"""
        if 0 <= x < self.width and 0 <= y < self.height:
            self.pixels[y, x] = 1 if color else 0

    def get_pixel(self, x: int, y: int) -> bool:
        if 0 <= x < self.width and 0 <= y < self.height:
            return bool(self.pixels[y, x])
        return False

    def copy(self) -> "Frame":
        frame = Frame(self.width, self.height)
        frame.pixels[:] = self.pixels
        return frame

    def to_bytes(self) -> bytes:
        """
        Returns the SSD1306 GDDRAM layout: pages of 8 rows,
        one byte per column, LSB is the top row of the page.
        """
        pages = (self.height + 7) // 8
        padded = np.zeros((pages * 8, self.width), dtype=np.uint8)
        padded[:self.height] = self.pixels
        # (pages, 8, width) -> bit-pack along the row axis
        packed = np.packbits(padded.reshape(pages, 8, self.width), axis=1, bitorder="little")
        return packed.reshape(pages, self.width).tobytes()
