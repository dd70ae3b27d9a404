import pytest

from src.llmproxy.errors import ValidationError
from src.llmproxy.input_spec import parse_proxy_request

def test_parse_minimal():
    req = parse_proxy_request('{"system":"sys","messages":[{"role":"user","content":"hi"}]}')
    assert req.system == "sys"
    assert req.messages == [{"role": "user", "content": "hi"}]

def test_parse_accepts_dict_and_bytes():
    assert parse_proxy_request({"messages": []}).messages == []
    req = parse_proxy_request(b'{"messages":[{"role":"USER","content":"x"}]}')
    assert req.messages == [{"role": "user", "content": "x"}]

def test_parse_empty_body_is_empty_request():
    for body in (None, "", "   ", "null"):
        req = parse_proxy_request(body)
        assert req.system is None
        assert req.messages == []

def test_parse_drops_unknown_roles_and_junk_entries():
    req = parse_proxy_request({
        "messages": [
            {"role": "tool", "content": "x"},
            "not a message",
            {"role": "assistant", "content": None},
            {"role": "user", "content": {"k": 1}},
        ]
    })
    assert req.messages == [
        {"role": "assistant", "content": ""},
        {"role": "user", "content": '{"k": 1}'},
    ]

def test_parse_blank_system_is_none():
    assert parse_proxy_request({"system": "  "}).system is None

@pytest.mark.parametrize("body", ["{not json", "[1, 2]", '"text"'])
def test_parse_rejects_non_object_bodies(body):
    with pytest.raises(ValidationError):
        parse_proxy_request(body)

def test_parse_rejects_non_list_messages():
    with pytest.raises(ValidationError):
        parse_proxy_request({"messages": "hi"})
