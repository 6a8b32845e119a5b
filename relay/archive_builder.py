import io
import zipfile

from .models import HtmlPayload

INDEX_FILE = 'index.html'
HEADERS_FILE = '_headers'
NETLIFY_TOML_FILE = 'netlify.toml'

HEADERS_CONTENT = """/*
  X-Frame-Options: DENY
  X-Content-Type-Options: nosniff
  Referrer-Policy: strict-origin-when-cross-origin
/index.html
  Content-Type: text/html; charset=UTF-8
"""

NETLIFY_TOML_CONTENT = """[build]
  publish = "."

[[redirects]]
  from = "/*"
  to = "/index.html"
  status = 200
"""

# Fixed entry timestamp (zip epoch) keeps archives byte-identical across runs
_ZIP_DATE_TIME = (1980, 1, 1, 0, 0, 0)


def _entry(name: str) -> zipfile.ZipInfo:
    info = zipfile.ZipInfo(name, date_time=_ZIP_DATE_TIME)
    info.compress_type = zipfile.ZIP_DEFLATED
    info.external_attr = 0o644 << 16
    return info


def build_archive(html: HtmlPayload) -> bytes:
    """Zip the page together with the static _headers and netlify.toml."""
    if isinstance(html, str):
        html = html.encode('utf-8')

    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, 'w', zipfile.ZIP_DEFLATED) as zf:
        zf.writestr(_entry(INDEX_FILE), html)
        zf.writestr(_entry(HEADERS_FILE), HEADERS_CONTENT.encode('utf-8'))
        zf.writestr(_entry(NETLIFY_TOML_FILE), NETLIFY_TOML_CONTENT.encode('utf-8'))
    return buffer.getvalue()
