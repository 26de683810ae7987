from webservice.client import Webservice, get_webservice
from webservice.errors import ApiError, DecodeError, HttpError, InvalidURLError, UnknownError
from webservice.keystore import get_key_for
from webservice.models import HeaderField, QueryParameter, Result

__all__ = [
    "ApiError",
    "DecodeError",
    "HeaderField",
    "HttpError",
    "InvalidURLError",
    "QueryParameter",
    "Result",
    "UnknownError",
    "Webservice",
    "get_key_for",
    "get_webservice",
]
