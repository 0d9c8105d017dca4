# Licensed under the GPLv3 - see LICENSE
import io

import pytest

from ...base64.codec import Base64Codec
from ..codec import BadCharacterError, BadLengthError
from ..base import (DEFAULT_BUFFER_SIZE, check_buffer_size,
                    encode_stream, decode_stream,
                    StreamReaderBase, StreamWriterBase, FileOpener)


DATA = b'Many hands make light work.'
TEXT = 'TWFueSBoYW5kcyBtYWtlIGxpZ2h0IHdvcmsu'


class KeepOpenStringIO(io.StringIO):
    def close(self):
        pass


def test_check_buffer_size():
    assert DEFAULT_BUFFER_SIZE == 1048576
    assert check_buffer_size(1) == 1
    with pytest.raises(ValueError):
        check_buffer_size(0)
    with pytest.raises(TypeError):
        check_buffer_size(1.5)


class TestTranscodeStreams:
    def setup_method(self):
        self.codec = Base64Codec()

    @pytest.mark.parametrize('buffer_size', [1, 2, 5, DEFAULT_BUFFER_SIZE])
    def test_encode_stream(self, buffer_size):
        fh_out = io.BytesIO()
        nbytes = encode_stream(self.codec, io.BytesIO(DATA), fh_out,
                               buffer_size=buffer_size)
        assert nbytes == len(DATA)
        assert fh_out.getvalue() == TEXT.encode('ascii')

    def test_encode_stream_text(self):
        fh_out = io.StringIO()
        encode_stream(self.codec, io.BytesIO(DATA), fh_out, buffer_size=4)
        assert fh_out.getvalue() == TEXT

    def test_encode_stream_needs_binary_input(self):
        with pytest.raises(TypeError):
            encode_stream(self.codec, io.StringIO('abc'), io.StringIO())

    @pytest.mark.parametrize('buffer_size', [1, 3, 7, DEFAULT_BUFFER_SIZE])
    def test_decode_stream(self, buffer_size):
        fh_out = io.BytesIO()
        nchars = decode_stream(self.codec, io.StringIO(TEXT), fh_out,
                               buffer_size=buffer_size)
        assert nchars == len(TEXT)
        assert fh_out.getvalue() == DATA
        fh_out = io.BytesIO()
        decode_stream(self.codec, io.BytesIO(TEXT.encode('ascii')), fh_out,
                      buffer_size=buffer_size)
        assert fh_out.getvalue() == DATA

    def test_decode_stream_needs_binary_output(self):
        with pytest.raises(TypeError):
            decode_stream(self.codec, io.StringIO(TEXT), io.StringIO())

    def test_decode_stream_errors(self):
        with pytest.raises(BadCharacterError) as excinfo:
            decode_stream(self.codec, io.StringIO('Zm8=Zm8='), io.BytesIO(),
                          buffer_size=3)
        assert excinfo.value.offset == 3
        with pytest.raises(BadLengthError) as excinfo:
            decode_stream(self.codec, io.StringIO('Zm9vY'), io.BytesIO(),
                          buffer_size=2)
        assert excinfo.value.offset == 5

    def test_empty(self):
        fh_out = io.BytesIO()
        assert encode_stream(self.codec, io.BytesIO(), fh_out) == 0
        assert fh_out.getvalue() == b''
        assert decode_stream(self.codec, io.BytesIO(), fh_out) == 0
        assert fh_out.getvalue() == b''


class TestStreamReaderWriter:
    def setup_method(self):
        self.codec = Base64Codec()

    def test_writer(self):
        fh_raw = io.BytesIO()
        fh = StreamWriterBase(fh_raw, self.codec)
        assert fh.write(DATA[:2]) == 2
        assert fh.tell() == 2
        # Nothing written until a block is complete.
        assert fh_raw.getvalue() == b''
        fh.write(DATA[2:-1])
        assert fh_raw.getvalue() == TEXT[:32].encode('ascii')
        fh.write(DATA[-1:])
        assert fh_raw.getvalue() == TEXT.encode('ascii')
        assert fh.tell() == len(DATA)
        assert fh.writable()
        fh.close()
        assert fh.closed
        with pytest.raises(ValueError):
            fh.write(b'more')

    def test_writer_flushes_final_block(self):
        fh_raw = KeepOpenStringIO()
        with StreamWriterBase(fh_raw, self.codec) as fh:
            fh.write(b'foob')
            assert fh_raw.getvalue() == 'Zm9v'
        assert fh_raw.getvalue() == 'Zm9vYg=='

    def test_reader(self):
        fh = StreamReaderBase(io.StringIO(TEXT), self.codec, buffer_size=5)
        assert fh.read(4) == DATA[:4]
        assert fh.tell() == 4
        assert fh.read(0) == b''
        assert fh.read() == DATA[4:]
        assert fh.read(10) == b''
        assert fh.tell() == len(DATA)
        assert fh.readable()
        fh.close()
        with pytest.raises(ValueError):
            fh.read()

    def test_reader_errors(self):
        fh = StreamReaderBase(io.BytesIO(b'Zm9vYmFy!A=='), self.codec,
                              buffer_size=4)
        assert fh.read(3) == b'foo'
        with pytest.raises(BadCharacterError) as excinfo:
            fh.read()
        assert excinfo.value.offset == 8
        with pytest.warns(UserWarning, match='undecoded'):
            fh.close()

    @pytest.mark.filterwarnings('error')
    def test_reader_close_after_reading_all_data(self):
        # The end of the input is only found on closing.
        fh = StreamReaderBase(io.BytesIO(b'Zm9vYmFy'), self.codec)
        assert fh.read(6) == b'foobar'
        fh.close()
        assert fh.closed

    def test_reader_close_with_data_remaining(self):
        fh = StreamReaderBase(io.BytesIO(b'Zm9vYmFy'), self.codec,
                              buffer_size=4)
        assert fh.read(3) == b'foo'
        with pytest.warns(UserWarning, match='undecoded'):
            fh.close()
        fh = StreamReaderBase(io.BytesIO(b'Zm9v!A=='), self.codec,
                              buffer_size=4)
        assert fh.read(3) == b'foo'
        with pytest.warns(UserWarning, match='bad character at offset 4'):
            fh.close()

    def test_reader_bad_buffer_size(self):
        with pytest.raises(ValueError):
            StreamReaderBase(io.BytesIO(), self.codec, buffer_size=0)

    def test_repr(self):
        fh = StreamReaderBase(io.BytesIO(), self.codec)
        assert 'codec=Base64Codec(optional_padding=False)' in repr(fh)


class Base64TestStreamReader(StreamReaderBase):
    def __init__(self, fh_raw, *, optional_padding=False):
        super().__init__(fh_raw, Base64Codec(optional_padding))


class Base64TestStreamWriter(StreamWriterBase):
    def __init__(self, fh_raw):
        super().__init__(fh_raw, Base64Codec())


class TestFileOpener:
    def setup_method(self):
        self.open = FileOpener.create(
            {'__name__': 'test_base',
             'Base64TestStreamReader': Base64TestStreamReader,
             'Base64TestStreamWriter': Base64TestStreamWriter},
            doc='\nExtra docs.\n')

    def test_create(self):
        assert self.open.__module__ == 'test_base'
        assert 'Open a Base64Test encoded file' in self.open.__doc__
        assert self.open.__doc__.endswith('Extra docs.\n')
        assert self.open.classes == {'r': Base64TestStreamReader,
                                     'w': Base64TestStreamWriter}

    def test_create_needs_reader(self):
        with pytest.raises(ValueError, match='StreamReader'):
            FileOpener.create({'__name__': 'test_base'})

    @pytest.mark.parametrize('mode', ['b', 't'])
    def test_write_read(self, tmpdir, mode):
        name = str(tmpdir.join('test.b64'))
        with self.open(name, 'w' + mode) as fw:
            assert isinstance(fw, Base64TestStreamWriter)
            fw.write(DATA)

        with open(name, 'rt') as fr:
            assert fr.read() == TEXT

        with self.open(name, 'r' + mode) as fr:
            assert isinstance(fr, Base64TestStreamReader)
            assert fr.read() == DATA

    def test_filehandle(self):
        fh_raw = io.BytesIO(b'Zm9vYg')
        with self.open(fh_raw, 'r', optional_padding=True) as fh:
            assert fh.read() == b'foob'
        assert fh_raw.closed

    def test_bad_mode(self):
        with pytest.raises(ValueError, match='invalid mode'):
            self.open('nonexistent', 'rs')

    def test_bad_keyword_closes_file(self, tmpdir):
        name = str(tmpdir.join('test.b64'))
        with pytest.raises(TypeError):
            self.open(name, 'w', fold_zero=True)
        # The file was created, but should be closed again.
        assert tmpdir.join('test.b64').check()
