from webservice.client.cache import ResponseCache
from webservice.client.query import build_query_string, build_url
from webservice.client.webservice import Webservice, get_webservice

__all__ = ["ResponseCache", "Webservice", "build_query_string", "build_url", "get_webservice"]
