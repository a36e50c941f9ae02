"""
Test Configuration and Fixtures
"""
import pytest

from app import create_app
from app.services.mail_service import MailResult


def _pdf_escape(s):
    return s.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def build_pdf(pages):
    """Build a minimal PDF.

    ``pages`` is a list of pages, each a list of lines. A line is a string, or
    a tuple of strings drawn as separate runs 100pt apart on one baseline.
    """
    objects = []

    def add(body):
        objects.append(body)
        return len(objects)

    catalog = add(None)
    pages_obj = add(None)
    font = add(b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica /Encoding /WinAnsiEncoding >>")

    kids = []
    for lines in pages:
        ops = []
        y = 720
        for line in lines:
            runs = line if isinstance(line, tuple) else (line,)
            shown = " 100 0 Td ".join(f"({_pdf_escape(r)}) Tj" for r in runs)
            ops.append(f"BT /F1 12 Tf 72 {y} Td {shown} ET")
            y -= 20
        stream = "\n".join(ops).encode("latin-1")
        content = add(b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream")
        page = add(
            f"<< /Type /Page /Parent {pages_obj} 0 R /MediaBox [0 0 612 792] "
            f"/Resources << /Font << /F1 {font} 0 R >> >> /Contents {content} 0 R >>".encode()
        )
        kids.append(page)

    objects[catalog - 1] = f"<< /Type /Catalog /Pages {pages_obj} 0 R >>".encode()
    kid_refs = " ".join(f"{k} 0 R" for k in kids)
    objects[pages_obj - 1] = f"<< /Type /Pages /Kids [{kid_refs}] /Count {len(kids)} >>".encode()

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for num, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % num + body + b"\nendobj\n"
    xref_at = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for off in offsets:
        out += b"%010d 00000 n \n" % off
    out += b"trailer\n<< /Size %d /Root %d 0 R >>\n" % (len(objects) + 1, catalog)
    out += b"startxref\n%d\n%%%%EOF\n" % xref_at
    return bytes(out)


class FakeSummarizer:
    """Stands in for ReportSummarizer; echoes the keywords it was given."""

    ready = True

    def __init__(self):
        self.calls = []
        self.error = None
        self.hook = None

    def summarize(self, keywords):
        self.calls.append(keywords)
        if self.hook is not None:
            self.hook(keywords)
        if self.error is not None:
            raise self.error
        return f"Summary of: {keywords}"


class FakeMailer:
    ready = True

    def __init__(self):
        self.sent = []
        self.result = MailResult(ok=True, info={
            "accepted": ["patient@example.com"],
            "rejected": [],
            "messageId": "<abc@example.com>",
            "response": "250 2.0.0 OK",
        })

    def send(self, message):
        self.sent.append(message)
        return self.result


@pytest.fixture
def app(tmp_path):
    """Create application for testing"""
    app = create_app('testing')
    app.config['UPLOAD_FOLDER'] = str(tmp_path / "uploads")
    app.extensions["mediclarity"]["uploads"].folder = app.config['UPLOAD_FOLDER']
    app.extensions["mediclarity"]["summarizer"] = FakeSummarizer()
    app.extensions["mediclarity"]["mailer"] = FakeMailer()
    yield app


@pytest.fixture
def client(app):
    """Create test client"""
    return app.test_client()


@pytest.fixture
def summarizer(app):
    return app.extensions["mediclarity"]["summarizer"]


@pytest.fixture
def mailer(app):
    return app.extensions["mediclarity"]["mailer"]


@pytest.fixture
def upload_dir(app):
    return app.config['UPLOAD_FOLDER']


@pytest.fixture
def make_pdf():
    return build_pdf
