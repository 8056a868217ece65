import io

from models.fastgpt import FastGPTRequest, FastGPTResponse, Reference
from orchestrator.core import QueryOrchestrator, build_request


def test_build_request_enables_web_search_and_cache():
    assert build_request("capital of France") == FastGPTRequest(
        query="capital of France", web_search=True, cache=True
    )


def test_ask_returns_printed_answer(fake_client_cls):
    response = FastGPTResponse(
        output="Use\n\nthis.",
        references=[Reference(title="Docs", link="https://docs.example", snippet="howto")],
    )
    stdout = io.StringIO()
    orchestrator = QueryOrchestrator(client=fake_client_cls(response=response), stdout=stdout)

    answer = orchestrator.ask("how")

    assert answer == stdout.getvalue()
    assert answer == "# how\nUse\nthis.\n\n# References\n1. Docs - https://docs.example  - howto\n"


def test_same_question_overwrites_cache_entry(fake_client_cls, tmp_path):
    first = QueryOrchestrator(
        client=fake_client_cls(response=FastGPTResponse(output="first")),
        stdout=io.StringIO(),
        cache_dir=str(tmp_path),
    )
    second = QueryOrchestrator(
        client=fake_client_cls(response=FastGPTResponse(output="second")),
        stdout=io.StringIO(),
        cache_dir=str(tmp_path),
    )
    first.ask("q")
    second.ask("q")

    files = list(tmp_path.iterdir())
    assert len(files) == 1
    assert '"answer":"# q\\nsecond\\n"' in files[0].read_text(encoding="utf-8")
