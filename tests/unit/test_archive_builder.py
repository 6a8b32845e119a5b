"""
Unit tests for archive_builder module.
"""
import io
import zipfile
from relay.archive_builder import (
    build_archive,
    HEADERS_CONTENT,
    NETLIFY_TOML_CONTENT,
)


def _open(archive: bytes) -> zipfile.ZipFile:
    return zipfile.ZipFile(io.BytesIO(archive))


class TestBuildArchive:
    """Tests for build_archive function."""

    def test_is_valid_zip(self):
        """Output should be a readable zip."""
        archive = build_archive('<h1>hi</h1>')
        assert archive[:2] == b'PK'
        assert _open(archive).testzip() is None

    def test_contains_expected_files(self):
        """Bundle holds index.html plus the two auxiliary files."""
        names = _open(build_archive('<h1>hi</h1>')).namelist()
        assert names == ['index.html', '_headers', 'netlify.toml']

    def test_index_is_payload(self):
        """index.html is the UTF-8 encoded payload."""
        html = '<h1>Café ☕</h1>'
        assert _open(build_archive(html)).read('index.html') == html.encode('utf-8')

    def test_bytes_payload_unchanged(self):
        """Byte payloads (file uploads) are stored as-is."""
        raw = b'<h1>\xff\xfe not utf-8</h1>'
        assert _open(build_archive(raw)).read('index.html') == raw

    def test_static_files(self):
        """Auxiliary files carry the static content."""
        zf = _open(build_archive('<p></p>'))
        assert zf.read('_headers').decode('utf-8') == HEADERS_CONTENT
        assert zf.read('netlify.toml').decode('utf-8') == NETLIFY_TOML_CONTENT

    def test_static_files_independent_of_payload(self):
        """Auxiliary files are byte-identical whatever the HTML."""
        a = _open(build_archive('<p>a</p>'))
        b = _open(build_archive('<p>completely different</p>' * 100))
        assert a.read('_headers') == b.read('_headers')
        assert a.read('netlify.toml') == b.read('netlify.toml')

    def test_deterministic(self):
        """Same HTML gives the same archive bytes."""
        html = '<html><body>same</body></html>'
        assert build_archive(html) == build_archive(html)

    def test_netlify_toml_routes_to_index(self):
        """Redirect rule should rewrite everything to index.html."""
        assert 'to = "/index.html"' in NETLIFY_TOML_CONTENT
        assert 'status = 200' in NETLIFY_TOML_CONTENT

    def test_headers_sets_html_content_type(self):
        """index.html should be served as text/html."""
        assert 'Content-Type: text/html; charset=UTF-8' in HEADERS_CONTENT
