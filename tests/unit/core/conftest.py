"""Shared fixtures for core unit tests"""

import pytest

from lessonmark.core.utils.ids import CounterIdGenerator


SAMPLE_MARKUP = """\
<h2>Intro</h2>
<p>Some <strong>bold</strong> text</p>
<code language="python">print("hi")</code>
<multicode><snippet label="JS" language="javascript">console.log(1)</snippet><snippet label="Py" language="python">print(1)</snippet></multicode>
<note type="tip">Remember <em>this</em></note>
<img src="https://cdn.example.com/a.png" alt="Image"/>
<carousel><img src="1.png" alt="one"/><img src="2.png" alt="two"/></carousel>"""


@pytest.fixture(name="ids")
def ids_fixture():
    return CounterIdGenerator()


@pytest.fixture(name="sample_markup")
def sample_markup_fixture():
    return SAMPLE_MARKUP
