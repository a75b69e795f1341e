"""Literal source tables for the built-in entries of each domain.

These lists are the single source of truth for the built-in registries.
Each row is (key, group(s), secondary, disambiguator), trailing fields
optional. Keys must be unique within a table.
"""

from __future__ import annotations

from httpconv._types import INAPPLICABLE

# RFC 9110 §9 methods plus PATCH (RFC 5789), with their semantic classes.
# POST is cacheable only when the response says so explicitly.
METHODS_SOURCE = (
    ("GET", ("safe", "idempotent", "cacheable")),
    ("HEAD", ("safe", "idempotent", "cacheable")),
    ("POST", ("non_idempotent", "cacheable")),
    ("PUT", ("idempotent",)),
    ("DELETE", ("idempotent",)),
    ("CONNECT", ("special_purpose",)),
    ("OPTIONS", ("idempotent", "preflight")),
    ("TRACE", ("idempotent", "preflight", "special_purpose")),
    ("PATCH", ("non_idempotent",)),
)

# IANA HTTP status code registry, RFC 9110 §15.
STATUSES_SOURCE = (
    (100, "info", "Continue"),
    (101, "info", "Switching Protocols"),
    (102, "info", "Processing"),
    (103, "info", "Early Hints"),
    (200, "success", "OK"),
    (201, "success", "Created"),
    (202, "success", "Accepted"),
    (203, "success", "Non-Authoritative Information"),
    (204, "success", "No Content"),
    (205, "success", "Reset Content"),
    (206, "success", "Partial Content"),
    (207, "success", "Multi-Status"),
    (208, "success", "Already Reported"),
    (226, "success", "IM Used"),
    (300, "redirect", "Multiple Choices"),
    (301, "redirect", "Moved Permanently"),
    (302, "redirect", "Found"),
    (303, "redirect", "See Other"),
    (304, "redirect", "Not Modified"),
    (305, "redirect", "Use Proxy"),
    (307, "redirect", "Temporary Redirect"),
    (308, "redirect", "Permanent Redirect"),
    (400, "clienterr", "Bad Request"),
    (401, "clienterr", "Unauthorized"),
    (402, "clienterr", "Payment Required"),
    (403, "clienterr", "Forbidden"),
    (404, "clienterr", "Not Found"),
    (405, "clienterr", "Method Not Allowed"),
    (406, "clienterr", "Not Acceptable"),
    (407, "clienterr", "Proxy Authentication Required"),
    (408, "clienterr", "Request Timeout"),
    (409, "clienterr", "Conflict"),
    (410, "clienterr", "Gone"),
    (411, "clienterr", "Length Required"),
    (412, "clienterr", "Precondition Failed"),
    (413, "clienterr", "Content Too Large"),
    (414, "clienterr", "URI Too Long"),
    (415, "clienterr", "Unsupported Media Type"),
    (416, "clienterr", "Range Not Satisfiable"),
    (417, "clienterr", "Expectation Failed"),
    (421, "clienterr", "Misdirected Request"),
    (422, "clienterr", "Unprocessable Content"),
    (423, "clienterr", "Locked"),
    (424, "clienterr", "Failed Dependency"),
    (425, "clienterr", "Too Early"),
    (426, "clienterr", "Upgrade Required"),
    (428, "clienterr", "Precondition Required"),
    (429, "clienterr", "Too Many Requests"),
    (431, "clienterr", "Request Header Fields Too Large"),
    (451, "clienterr", "Unavailable For Legal Reasons"),
    (500, "servererr", "Internal Server Error"),
    (501, "servererr", "Not Implemented"),
    (502, "servererr", "Bad Gateway"),
    (503, "servererr", "Service Unavailable"),
    (504, "servererr", "Gateway Timeout"),
    (505, "servererr", "HTTP Version Not Supported"),
    (506, "servererr", "Variant Also Negotiates"),
    (507, "servererr", "Insufficient Storage"),
    (508, "servererr", "Loop Detected"),
    (510, "servererr", "Not Extended"),
    (511, "servererr", "Network Authentication Required"),
)

HEADERS_SOURCE = (
    ("Authorization",),
    ("Content-Type",),
    ("Accept",),
    ("Accept-Encoding",),
    ("Accept-Language",),
    ("Cookie",),
    ("User-Agent",),
    ("X-Requested-With",),
    ("Content-Length",),
    ("Set-Cookie",),
    ("Cache-Control",),
    ("ETag",),
    ("Last-Modified",),
    ("Location",),
    ("Access-Control-Allow-Origin",),
)

# Entries sharing an extension (.xml, .webm, .sql) carry a disambiguator on
# the later one so (extension, disambiguator) stays unique.
MIME_SOURCE = (
    # Text
    ("text/plain", "TEXT", ".txt"),
    ("text/html", "TEXT", ".html"),
    ("text/css", "TEXT", ".css"),
    ("text/csv", "TEXT", ".csv"),
    ("text/tab-separated-values", "TEXT", ".tsv"),
    ("text/xml", "TEXT", ".xml"),
    ("text/yaml", "TEXT", ".yaml"),
    ("text/markdown", "TEXT", ".md"),
    ("text/richtext", "TEXT", ".rtf"),
    # Image
    ("image/png", "IMAGE", ".png"),
    ("image/jpeg", "IMAGE", ".jpeg"),
    ("image/gif", "IMAGE", ".gif"),
    ("image/bmp", "IMAGE", ".bmp"),
    ("image/svg+xml", "IMAGE", ".svg"),
    ("image/webp", "IMAGE", ".webp"),
    ("image/heif", "IMAGE", ".heif"),
    # Video
    ("video/mp4", "VIDEO", ".mp4"),
    ("video/webm", "VIDEO", ".webm"),
    ("video/ogg", "VIDEO", ".ogv"),
    ("video/avi", "VIDEO", ".avi"),
    ("video/3gpp", "VIDEO", ".3gp"),
    # Audio
    ("audio/mpeg", "AUDIO", ".mp3"),
    ("audio/wav", "AUDIO", ".wav"),
    ("audio/ogg", "AUDIO", ".ogg"),
    ("audio/flac", "AUDIO", ".flac"),
    ("audio/webm", "AUDIO", ".webm", 1),
    # Application
    ("application/json", "APPLICATION", ".json"),
    ("application/xml", "APPLICATION", ".xml", 1),
    ("application/javascript", "APPLICATION", ".js"),
    ("application/pdf", "APPLICATION", ".pdf"),
    ("application/zip", "APPLICATION", ".zip"),
    ("application/gzip", "APPLICATION", ".gz"),
    ("application/x-tar", "APPLICATION", ".tar"),
    ("application/java-archive", "APPLICATION", ".jar"),
    ("application/xhtml+xml", "APPLICATION", ".xhtml"),
    ("application/sql", "APPLICATION", ".sql"),
    ("application/x-sql", "APPLICATION", ".sql", 1),
    ("application/ld+json", "APPLICATION", ".jsonld"),
    # Multipart
    ("multipart/form-data", "MULTIPART", INAPPLICABLE),
    ("multipart/mixed", "MULTIPART", INAPPLICABLE),
    ("multipart/alternative", "MULTIPART", INAPPLICABLE),
    ("multipart/related", "MULTIPART", INAPPLICABLE),
    # Font
    ("font/ttf", "FONT", ".ttf"),
    ("font/otf", "FONT", ".otf"),
    ("font/woff", "FONT", ".woff"),
    ("font/woff2", "FONT", ".woff2"),
)
