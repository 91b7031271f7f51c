"""Tests for the SAX bridge and XML serialization."""

import io
from xml.sax.handler import ContentHandler

from jsonxml import create_reader
from jsonxml.output import to_sax, to_xml


DECL = '<?xml version="1.0" encoding="utf-8"?>\n'


class RecordingHandler(ContentHandler):
    def __init__(self):
        super().__init__()
        self.calls = []

    def startDocument(self):
        self.calls.append(("startDocument",))

    def endDocument(self):
        self.calls.append(("endDocument",))

    def startElement(self, name, attrs):
        self.calls.append(("startElement", name, dict(attrs)))

    def endElement(self, name):
        self.calls.append(("endElement", name))

    def characters(self, content):
        self.calls.append(("characters", content))

    def processingInstruction(self, target, data):
        self.calls.append(("pi", target, data))


# ---------------------------------------------------------------------------
# to_sax
# ---------------------------------------------------------------------------

def test_to_sax_calls():
    handler = RecordingHandler()
    to_sax(create_reader('{"alice": {"@xmlns:p": "urn:p", "@p:id": "1", "$": "bob"}}'), handler)
    assert handler.calls == [
        ("startDocument",),
        ("startElement", "alice", {"xmlns:p": "urn:p", "p:id": "1"}),
        ("characters", "bob"),
        ("endElement", "alice"),
        ("endDocument",),
    ]

def test_to_sax_pi_without_data():
    handler = RecordingHandler()
    to_sax(create_reader("[1]"), handler)
    assert handler.calls == [("pi", "xml-multiple", ""), ("characters", "1")]


# ---------------------------------------------------------------------------
# to_xml
# ---------------------------------------------------------------------------

def test_to_xml_simple():
    assert to_xml(create_reader('{"alice": "bob"}')) == DECL + "<alice>bob</alice>"

def test_to_xml_attributes_and_empty_elements():
    xml = to_xml(create_reader('{"alice": {"@id": "1", "bob": null}}'), declaration=False)
    assert xml == '<alice id="1"><bob/></alice>'

def test_to_xml_escapes_text():
    xml = to_xml(create_reader('{"a": "x < y & z", "b": {"@q": "1<2"}}'), declaration=False)
    assert xml == '<a>x &lt; y &amp; z</a><b q="1&lt;2"/>'

def test_to_xml_array_with_pi():
    xml = to_xml(create_reader('{"r": {"i": [1, 2]}}'), declaration=False)
    assert xml == "<r><?xml-multiple i?><i>1</i><i>2</i></r>"

def test_to_xml_default_namespace():
    xml = to_xml(create_reader('{"r": {"@xmlns": {"$": "urn:r"}}}'), declaration=False)
    assert xml == '<r xmlns="urn:r"/>'

def test_to_xml_into_stream():
    out = io.StringIO()
    assert to_xml(create_reader('{"a": "b"}'), out, declaration=False) is None
    assert out.getvalue() == "<a>b</a>"

def test_to_xml_document_array_single_declaration():
    xml = to_xml(create_reader('[{"a": "x"}, {"b": "y"}]'))
    assert xml.startswith(DECL)
    assert xml.count("<?xml version") == 1
    assert xml == DECL + "<?xml-multiple?><a>x</a><b>y</b>"

def test_to_xml_pi_without_data():
    assert to_xml(create_reader("[1]"), declaration=False) == "<?xml-multiple?>1"
