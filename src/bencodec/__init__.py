"""
Bencode package for encoding and decoding BitTorrent data.
"""
import logging

from .config import DEFAULT_CONFIG, DecoderConfig
from .decoder import BencodeDecoder, decode, decode_all, decode_exact
from .encoder import encode, encode_to, iter_encode
from .exceptions import (
    BencodeDecodeError,
    BencodeEncodeError,
    BencodeError,
    DepthExceeded,
    DuplicateKey,
    InputTooLarge,
    InvalidDictionaryKey,
    InvalidInteger,
    InvalidLeadByte,
    InvalidStringLength,
    SinkError,
    TrailingData,
    UnexpectedEof,
    UnsortedKeys,
)
from .stream import ByteReader
from .structure import BencodeDict, BencodeInt, BencodeList, BencodeString, BencodeType, from_python

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    'decode', 'decode_all', 'decode_exact', 'encode', 'encode_to', 'iter_encode',
    'BencodeDecoder', 'ByteReader', 'DecoderConfig', 'DEFAULT_CONFIG',
    'BencodeType', 'BencodeInt', 'BencodeString', 'BencodeList', 'BencodeDict', 'from_python',
    'BencodeError', 'BencodeDecodeError', 'BencodeEncodeError',
    'UnexpectedEof', 'InvalidLeadByte', 'InvalidInteger', 'InvalidStringLength',
    'InvalidDictionaryKey', 'DuplicateKey', 'UnsortedKeys', 'DepthExceeded',
    'InputTooLarge', 'TrailingData', 'SinkError',
]
