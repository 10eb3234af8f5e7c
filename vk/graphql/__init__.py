"""
GraphQL request engine for vk.

Authenticated requests against the GitHub GraphQL API with retry of
transient failures, typed responses and cursor pagination.
"""

from .client import GraphQLClient, build_graphql_client
from .models import (
    DEFAULT_ENDPOINT,
    GraphQLEnvelope,
    GraphQLQuery,
    HttpResponse,
    PageInfo,
    dump_variables,
    operation_name,
)
from .pagination import MAX_PAGES, paginate
from .response import format_path, parse_response
from .transcript import TranscriptWriter
from .transport import GraphQLTransport, build_headers, payload_snippet

__all__ = [
    "GraphQLClient",
    "build_graphql_client",
    "GraphQLTransport",
    "TranscriptWriter",
    "GraphQLQuery",
    "GraphQLEnvelope",
    "HttpResponse",
    "PageInfo",
    "DEFAULT_ENDPOINT",
    "MAX_PAGES",
    "build_headers",
    "dump_variables",
    "format_path",
    "operation_name",
    "paginate",
    "parse_response",
    "payload_snippet",
]
