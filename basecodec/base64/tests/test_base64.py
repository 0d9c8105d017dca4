# Licensed under the GPLv3 - see LICENSE
import io
import base64

import pytest
import numpy as np

from ... import base64 as b64
from ...base.codec import BadLengthError, BadCharacterError


class TestBase64:
    @pytest.mark.parametrize(('data', 'text'), [
        (b'', ''),
        (b'f', 'Zg=='),
        (b'fo', 'Zm8='),
        (b'foo', 'Zm9v'),
        (b'foob', 'Zm9vYg=='),
        (b'fooba', 'Zm9vYmE='),
        (b'foobar', 'Zm9vYmFy')])
    def test_rfc4648_vectors(self, data, text):
        assert b64.encode(data) == text
        assert b64.decode(text) == data

    def test_full_alphabet(self):
        data = bytes(range(256))
        text = b64.encode(data)
        assert text == base64.b64encode(data).decode('ascii')
        assert '+' in text and '/' in text
        assert b64.decode(text) == data

    @pytest.mark.parametrize('size', [1, 2, 3, 100, 1001])
    def test_against_stdlib(self, size):
        data = np.random.default_rng(size).integers(0, 256, size,
                                                    dtype=np.uint8)
        data = data.tobytes()
        text = b64.encode(data)
        assert text == base64.b64encode(data).decode('ascii')
        assert b64.decode(text) == data

    def test_non_canonical_trailing_bits(self):
        # 'Zh' has non-zero bits beyond the single byte; still accepted.
        assert b64.decode('Zh==') == b'f'

    @pytest.mark.parametrize(('text', 'exc', 'offset'), [
        ('Z', BadLengthError, 1),
        ('Zm', BadLengthError, 2),
        ('Zm8', BadLengthError, 3),
        ('Zm9vY', BadLengthError, 5),
        ('Zm8=Zm8=', BadCharacterError, 3),
        ('Zm=8', BadCharacterError, 3),
        ('Z=m8', BadCharacterError, 1),
        ('=Zm8', BadCharacterError, 0),
        ('Zm9v!mFy', BadCharacterError, 4),
        ('Zm9vé===', BadCharacterError, 4),
        ('Zm 8', BadCharacterError, 2),
        ('Zm\ud8009', BadCharacterError, 2)])
    def test_decode_errors(self, text, exc, offset):
        with pytest.raises(exc) as excinfo:
            b64.decode(text)
        assert excinfo.value.offset == offset
        assert 'offset' in str(excinfo.value) or 'length' in str(
            excinfo.value)

    def test_surrogate_in_stream(self):
        # Same offset as decoding the whole text.
        with pytest.raises(BadCharacterError) as excinfo:
            b64.decode_stream(io.StringIO('Zm\ud8009'), io.BytesIO())
        assert excinfo.value.offset == 2

    def test_optional_padding(self):
        assert b64.decode('Zm9vYg', optional_padding=True) == b'foob'
        assert b64.decode('Zm9vYmE', optional_padding=True) == b'fooba'
        assert b64.decode('Zm9vYg==', optional_padding=True) == b'foob'
        with pytest.raises(BadLengthError) as excinfo:
            b64.decode('Zm9vY', optional_padding=True)
        assert excinfo.value.offset == 5
        with pytest.raises(BadCharacterError) as excinfo:
            b64.decode('Zm9vY=', optional_padding=True)
        assert excinfo.value.offset == 5

    @pytest.mark.parametrize('buffer_size', [1, 2, 3, 4, 1000])
    def test_stream_chunking(self, buffer_size):
        data = bytes(range(100))
        fh_raw = io.StringIO()
        b64.encode_stream(io.BytesIO(data), fh_raw, buffer_size=buffer_size)
        assert fh_raw.getvalue() == b64.encode(data)
        fh_raw.seek(0)
        fh_out = io.BytesIO()
        b64.decode_stream(fh_raw, fh_out, buffer_size=buffer_size)
        assert fh_out.getvalue() == data

    def test_open(self, tmpdir):
        name = str(tmpdir.join('test.b64'))
        with b64.open(name, 'wb') as fw:
            for i in range(10):
                fw.write(bytes([i]))
        with open(name, 'rb') as fh:
            assert fh.read() == base64.b64encode(bytes(range(10)))
        with b64.open(name, 'rb', buffer_size=3) as fr:
            assert fr.read(4) == bytes(range(4))
            assert fr.read(100) == bytes(range(4, 10))
