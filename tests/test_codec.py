import threading

import pytest
from pydantic import ValidationError

from qyaml import codec
from qyaml.config import Options, default_options, dump_yaml, load_yaml
from qyaml.values import ABSENT

SAMPLES = [
  {"a": -1, "b": 0.5, "c": "three"},
  {"name": "svc", "ports": [80, 443], "tls": {"enabled": True, "cert": None}},
  [1, "two", [3, [4.25, "five six"]], {"k": "v"}],
  {"quoted": ["", " x", "x ", "a: b", "true", "12", "é", 'q"q', "#tag", "a #b"]},
  {"nested": {"list": [{"a": 1}, {"b": [False, None]}]}, "after": "x"},
  {'a"b': 1, "c: d": 2, "": 3, "-": 4, "e f": -0.001},
  [{"a": {}}, 2],
  {"x": [{"a": {"b": {}}}, {"c": 1}], "y": [{"z": {}}]},
]


@pytest.fixture(autouse=True)
def clear_indent_env(monkeypatch):
  monkeypatch.delenv("QYAML_INDENT", raising=False)


def test_defaults_propagate_parent_options():
  coder1 = codec.defaults(a=1)
  coder2 = coder1.defaults(b=2)
  coder3 = coder2.defaults(c=3)
  assert coder3.options.model_dump() == {"indent": 2, "a": 1, "b": 2, "c": 3}
  assert coder1.options.model_dump() == {"indent": 2, "a": 1}


def test_defaults_override_indent():
  coder = codec.defaults(indent=4)
  assert coder.encode({"a": {"b": 1}}) == "a:\n    b: 1\n"
  assert coder.defaults(indent=3).encode({"a": {"b": 1}}) == "a:\n   b: 1\n"
  assert codec.encode({"a": {"b": 1}}, indent=1) == "a:\n b: 1\n"


def test_invalid_indent_rejected():
  with pytest.raises(ValidationError):
    codec.defaults(indent=0)
  with pytest.raises(ValidationError):
    Options(indent=-2)


def test_options_are_frozen():
  options = Options()
  with pytest.raises(ValidationError):
    options.indent = 5


def test_default_options_from_environment(monkeypatch):
  assert default_options().indent == 2
  monkeypatch.setenv("QYAML_INDENT", "4")
  assert default_options().indent == 4
  assert codec.encode({"a": {"b": 1}}) == "a:\n    b: 1\n"
  monkeypatch.setenv("QYAML_INDENT", "zero")
  with pytest.raises(ValidationError):
    default_options()


def test_round_trip():
  for value in SAMPLES:
    assert codec.decode(codec.encode(value)) == value


def test_re_encoding_is_idempotent():
  for value in SAMPLES:
    text = codec.encode(value)
    assert codec.encode(codec.decode(text)) == text


def test_round_trip_with_wide_indent():
  coder = codec.defaults(indent=5)
  for value in SAMPLES:
    assert coder.decode(coder.encode(value)) == value


def test_coder_decode_matches_module_decode():
  coder = codec.Coder()
  text = "a: undefined\nb:\n- 1\n"
  assert coder.decode(text) == codec.decode(text) == {"a": ABSENT, "b": [1]}


def test_shared_coder_across_threads():
  coder = codec.defaults(indent=3)
  expected = [(coder.encode(value), value) for value in SAMPLES]
  failures = []

  def worker():
    for _ in range(50):
      for text, value in expected:
        if coder.encode(value) != text or coder.decode(text) != value:
          failures.append(text)

  threads = [threading.Thread(target=worker) for _ in range(8)]
  for thread in threads:
    thread.start()
  for thread in threads:
    thread.join()

  assert failures == []


def test_dump_and_load_file(tmp_path):
  path = tmp_path / "config.yml"
  data = {"server": {"host": "localhost", "port": 8080}, "paths": ["/var/lib/app", "/tmp"]}

  dump_yaml(path, data, Options(indent=4))

  assert path.read_text(encoding="utf-8").startswith("server:\n    host: localhost\n")
  assert load_yaml(path) == data


def test_load_empty_file(tmp_path):
  path = tmp_path / "empty.yml"
  path.write_text("# nothing here\n", encoding="utf-8")
  assert load_yaml(path) == {}
