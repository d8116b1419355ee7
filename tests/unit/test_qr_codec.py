# Copyright (C) 2026 Alex Stoyanov
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along with this program.
# If not, see <https://www.gnu.org/licenses/>.

import io
import unittest

from PIL import Image

from attestation.core.errors import EncodingOverflow
from attestation.qr.codec import QrConfig, qr_image, qr_png

# Try to import zxingcpp for QR decoding verification
try:
    import zxingcpp  # noqa: F401

    from attestation.qr.scan import decode_image

    HAS_ZXING = True
except ImportError:
    HAS_ZXING = False

SAMPLE = "Cree le: 05/04/2021 a 14h02;\n Nom: Dupont;\n Motifs: travail, sante"


class TestQrCodec(unittest.TestCase):
    def test_exact_pixel_size(self) -> None:
        for size in (120, 121, 300, 57):
            with self.subTest(size=size):
                image = qr_image(SAMPLE, size)
                self.assertEqual(image.size, (size, size))
                self.assertEqual(image.mode, "L")

    def test_no_quiet_zone_beyond_rounding(self) -> None:
        """The finder pattern starts within the leftover rounding padding."""
        image = qr_image(SAMPLE, 300)
        bbox = Image.eval(image, lambda value: 255 - value).getbbox()
        self.assertIsNotNone(bbox)
        left, top, right, bottom = bbox
        self.assertEqual(left, top)
        self.assertEqual(right, bottom)
        self.assertIn((300 - right) - left, (0, 1))

    def test_deterministic_png(self) -> None:
        first = qr_png(SAMPLE, 120)
        second = qr_png(SAMPLE, 120)
        self.assertTrue(first.startswith(b"\x89PNG\r\n\x1a\n"))
        self.assertEqual(first, second)

    def test_png_is_valid_image(self) -> None:
        png = qr_png(SAMPLE, 300)
        with Image.open(io.BytesIO(png)) as img:
            self.assertEqual(img.format, "PNG")
            self.assertEqual(img.size, (300, 300))

    def test_payload_too_large_for_any_symbol(self) -> None:
        with self.assertRaises(EncodingOverflow):
            qr_image("a" * 3000, 300)

    def test_symbol_larger_than_requested_pixels(self) -> None:
        with self.assertRaises(EncodingOverflow):
            qr_image(SAMPLE, 20)

    def test_rejects_non_positive_size(self) -> None:
        with self.assertRaises(ValueError):
            qr_image(SAMPLE, 0)

    def test_higher_error_level_grows_symbol(self) -> None:
        low = qr_image(SAMPLE * 2, 300, config=QrConfig(error="L", boost_error=False))
        high = qr_image(SAMPLE * 2, 300, config=QrConfig(error="H", boost_error=False))
        self.assertNotEqual(low.tobytes(), high.tobytes())

    @unittest.skipUnless(HAS_ZXING, "zxingcpp not available")
    def test_sizes_decode_to_same_text(self) -> None:
        small = decode_image(qr_image(SAMPLE, 120))
        large = decode_image(qr_image(SAMPLE, 300))
        self.assertEqual(small, [SAMPLE])
        self.assertEqual(large, [SAMPLE])

    @unittest.skipUnless(HAS_ZXING, "zxingcpp not available")
    def test_latin1_text_decodes(self) -> None:
        text = "Nom: Hélène Lefèvre; Naissance: Besançon"
        self.assertEqual(decode_image(qr_image(text, 300)), [text])


if __name__ == "__main__":
    unittest.main()
