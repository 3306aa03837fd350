import pytest

# 1x1 transparent PNG
PNG_DATA_URI = (
    "data:image/png;base64,"
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)

SAMPLE_HTML = "<h1>Title</h1><p>Hello <strong>world</strong></p>"


@pytest.fixture
def sample_html():
    return SAMPLE_HTML


@pytest.fixture
def rich_html():
    return (
        "<h2>Plan</h2>"
        "<p>Intro with <em>emphasis</em> and <code>code</code>.</p>"
        "<ul><li><p>One</p></li><li><p>Two</p></li><li><p>Three</p></li></ul>"
        "<ol><li>First</li><li>Second</li></ol>"
        "<blockquote><p>Quoted text</p></blockquote>"
        "<pre><code>x = 1\ny = 2</code></pre>"
        "<hr>"
        "<table><tr><td>A</td></tr><tr><td>B</td><td>C</td></tr></table>"
        '<img src="https://example.com/a.png" alt="Diagram">'
    )


@pytest.fixture
def png_data_uri():
    return PNG_DATA_URI
