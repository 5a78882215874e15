from . import codec, encode, validation
from .codec import Codec
from .context import decoding_context
from .decode import (
    Decoder,
    DecodeResult,
    boolean,
    combine,
    date_epoch,
    date_iso_string,
    fail,
    integer,
    lazy,
    null_,
    null_as,
    number,
    one_of,
    string,
    succeed,
    value,
)
from .errors import (
    DecodeError,
    DecodeException,
    ElementError,
    Failure,
    FieldError,
    OneOfError,
    parse_error,
    render_error,
)
from .result import Err, Ok, Result
from .values import Value

__all__ = [
    # Result types
    "Ok",
    "Err",
    "Result",
    # Errors
    "DecodeError",
    "FieldError",
    "ElementError",
    "OneOfError",
    "Failure",
    "DecodeException",
    "render_error",
    "parse_error",
    # Decoders
    "Decoder",
    "DecodeResult",
    "Value",
    "string",
    "number",
    "integer",
    "boolean",
    "null_",
    "value",
    "null_as",
    "succeed",
    "fail",
    "one_of",
    "combine",
    "lazy",
    "date_epoch",
    "date_iso_string",
    # Codecs
    "Codec",
    "codec",
    "encode",
    "validation",
    # Configuration
    "decoding_context",
]
