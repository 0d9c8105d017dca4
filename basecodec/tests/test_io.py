# Licensed under the GPLv3 - see LICENSE
import io

import pytest
import numpy as np

import basecodec
from .. import io as bio
from ..base.codec import BadLengthError, BadCharacterError


@pytest.fixture(scope='module')
def data():
    return np.random.default_rng(12345).integers(
        0, 256, 1234, dtype=np.uint8).tobytes()


class TestDispatch:
    def test_top_level(self):
        assert basecodec.encode is bio.encode
        assert basecodec.decode is bio.decode
        assert basecodec.open is bio.open
        assert issubclass(basecodec.BadLengthError, basecodec.DecodeError)

    def test_default_codec(self):
        assert bio.encode(b'foobar') == 'Zm9vYmFy'
        assert bio.decode('Zm9vYmFy') == b'foobar'

    @pytest.mark.parametrize(('codec', 'text'), [
        ('base16', '666F6F62'),
        ('base32', 'MZXW6YQ='),
        ('base64', 'Zm9vYg=='),
        ('base85', 'AoDTs'),
        ('base36', '0SF742Q')])
    def test_codecs(self, codec, text):
        assert bio.encode(b'foob', codec=codec) == text
        assert bio.decode(text, codec=codec) == b'foob'

    def test_options(self):
        assert bio.encode(bytes(4), codec='base85', fold_zero=False) == '!!!!!'
        assert bio.decode('MZXW6YQ', codec='base32',
                          optional_padding=True) == b'foob'
        with pytest.raises(BadLengthError):
            bio.decode('MZXW6YQ', codec='base32')

    def test_unused_options(self):
        with pytest.warns(UserWarning, match='not used by base16'):
            assert bio.encode(b'f', codec='base16', fold_zero=False) == '66'
        with pytest.warns(UserWarning, match='optional_padding'):
            assert bio.decode('z', codec='base85',
                              optional_padding=True) == bytes(4)

    def test_unknown_codec(self):
        with pytest.raises(ValueError, match='unknown codec'):
            bio.encode(b'', codec='base58')
        with pytest.raises(ValueError, match='unknown codec'):
            bio.decode('', codec='_entries')

    def test_errors_propagate(self):
        with pytest.raises(BadCharacterError) as excinfo:
            bio.decode('Zm8=Zm8=')
        assert excinfo.value.offset == 3


class TestOpen:
    @pytest.mark.parametrize('codec', ['base16', 'base32', 'base64',
                                       'base85', 'base36'])
    @pytest.mark.parametrize('mode', ['b', 't'])
    def test_write_read(self, tmpdir, data, codec, mode):
        name = str(tmpdir.join('test.' + codec))
        with bio.open(name, 'w' + mode, codec=codec) as fw:
            fw.write(data[:100])
            fw.write(data[100:])
            assert fw.tell() == len(data)
        with open(name, 'rt') as fh:
            assert fh.read() == bio.encode(data, codec=codec)
        with bio.open(name, 'r' + mode, codec=codec, buffer_size=99) as fr:
            assert fr.read(10) == data[:10]
            assert fr.read() == data[10:]

    def test_options(self, tmpdir):
        name = str(tmpdir.join('test.a85'))
        with bio.open(name, 'w', codec='base85', fold_zero=False) as fw:
            fw.write(bytes(8))
        with open(name) as fh:
            assert fh.read() == '!' * 10
        with pytest.warns(UserWarning, match='buffer_size'):
            fw = bio.open(name, 'w', codec='base85', buffer_size=10)
        fw.close()
        with bio.open(name, 'r', codec='base85', buffer_size=3) as fr:
            assert fr.read() == b''

    def test_filehandle(self):
        fh = io.BytesIO(b'Zm9vYg')
        with bio.open(fh, 'r', optional_padding=True) as fr:
            assert fr.read() == b'foob'
