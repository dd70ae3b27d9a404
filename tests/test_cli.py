import json

import cli
from src.llmproxy.types import ProxyResponse

def test_repair_command_prints_parsed_object(capsys):
    assert cli.main(["repair", 'Sure! {"a": [1, 2,],}']) == 0
    assert json.loads(capsys.readouterr().out) == {"a": [1, 2]}

def test_repair_command_reads_file_and_falls_back(tmp_path, capsys):
    p = tmp_path / "raw.txt"
    p.write_text("no json today", encoding="utf-8")
    assert cli.main(["repair", f"@{p}", "--pretty"]) == 0
    assert json.loads(capsys.readouterr().out) == {"content": [{"type": "text", "text": "no json today"}]}

def test_repair_command_missing_file_exits_2(tmp_path):
    assert cli.main(["repair", f"@{tmp_path / 'missing.txt'}"]) == 2

def test_call_command_runs_handler(monkeypatch, capsys):
    seen = {}

    class FakeHandler:
        def handle(self, method, body, request_id=None):
            seen.update(method=method, body=body, request_id=request_id)
            return ProxyResponse(status=200, body={"ok": True})

    monkeypatch.setattr(cli.ProxyHandler, "for_vendor", classmethod(lambda cls, vendor: FakeHandler()))

    assert cli.main(["call", "groq", '{"messages": []}']) == 0
    assert json.loads(capsys.readouterr().out) == {"status": 200, "body": {"ok": True}}
    assert seen == {"method": "POST", "body": '{"messages": []}', "request_id": "CLI"}
