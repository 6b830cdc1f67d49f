import json
import logging
from pathlib import Path

import pytest
from typer.testing import CliRunner

from blocks2html import migrate_block, to_tree, tree_to_dicts
from blocks2html.cli import app
from blocks2html.keys import deterministic_key

FIXTURES = Path(__file__).resolve().parent / "fixtures"


def _fixture(name: str) -> str:
    return str(FIXTURES / name)


def test_cli_shows_help() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "Render block content JSON" in result.stdout


def test_render_html_to_stdout() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["render", _fixture("normal-text.json")])
    assert result.exit_code == 0
    assert result.stdout == "<p>Normal string of text.</p>\n"


def test_render_list_fixture() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["render", _fixture("list-numbered-blocks.json")])
    assert result.exit_code == 0
    assert result.stdout.startswith("<ol><li><p>One</p></li>")


def test_render_tree_with_deterministic_keys() -> None:
    runner = CliRunner()
    result = runner.invoke(
        app,
        ["render", _fixture("link-simple-text.json"), "--format", "tree", "--deterministic-keys"],
    )
    assert result.exit_code == 0
    content = json.loads((FIXTURES / "link-simple-text.json").read_text(encoding="utf-8"))
    expected = tree_to_dicts(to_tree(content, key_generator=deterministic_key))
    assert json.loads(result.stdout) == expected


def test_render_field_of_api_response() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["render", _fixture("api-response.json"), "--field", "body"])
    assert result.exit_code == 0
    lines = result.stdout.splitlines()
    assert lines[0] == "<h2>Hello</h2><p><em>World</em></p>"
    assert lines[1] == ""


def test_render_tree_field_returns_one_tree_per_document() -> None:
    runner = CliRunner()
    result = runner.invoke(
        app, ["render", _fixture("api-response.json"), "--field", "body", "--format", "tree"]
    )
    assert result.exit_code == 0
    trees = json.loads(result.stdout)
    assert len(trees) == 2
    assert trees[0][0] == {"type": "block", "style": "h2", "content": ["Hello"]}
    assert trees[1] == []


def test_render_image_with_cdn_options() -> None:
    runner = CliRunner()
    result = runner.invoke(
        app,
        [
            "render",
            _fixture("image-with-ref.json"),
            "--project-id",
            "abc123",
            "--dataset",
            "prod",
            "--image-option",
            "w=320",
            "--image-option",
            "fit=crop",
        ],
    )
    assert result.exit_code == 0
    assert "https://cdn.sanity.io/images/abc123/prod/" in result.stdout
    assert "3456x2304.jpg?w=320&fit=crop" in result.stdout


def test_render_image_without_project_fails() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["render", _fixture("image-with-ref.json")])
    assert result.exit_code == 1
    assert "Error:" in result.output
    assert "project_id" in result.output


def test_render_unknown_node_type_fails() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["render", _fixture("non-block.json")])
    assert result.exit_code == 1
    assert 'node type "author"' in result.output


@pytest.mark.parametrize(
    "extra_args, message",
    [
        (["--format", "xml"], "--format must be 'html' or 'tree'"),
        (["--charset", "no-such-charset"], "Unknown charset"),
        (["--image-option", "w320"], "Invalid image option"),
    ],
)
def test_render_option_validation(extra_args: list[str], message: str) -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["render", _fixture("normal-text.json"), *extra_args])
    assert result.exit_code == 1
    assert message in result.output


def test_render_invalid_json_fails(tmp_path: Path) -> None:
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(app, ["render", str(broken)])
    assert result.exit_code == 1
    assert "Failed to load documents" in result.output


def test_render_writes_out_file(tmp_path: Path) -> None:
    out = tmp_path / "nested" / "post.html"
    runner = CliRunner()
    result = runner.invoke(app, ["render", _fixture("h2-text.json"), "--out", str(out)])
    assert result.exit_code == 0
    assert "Wrote" in result.stdout
    assert out.read_text(encoding="utf-8") == "<h2>Such h2 header, much amaze</h2>\n"


def test_migrate_with_deterministic_keys() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["migrate", _fixture("link-author-text.json"), "--deterministic-keys"])
    assert result.exit_code == 0
    content = json.loads((FIXTURES / "link-author-text.json").read_text(encoding="utf-8"))
    assert json.loads(result.stdout) == migrate_block(content, key_generator=deterministic_key)


def test_migrate_rejects_non_content(tmp_path: Path) -> None:
    path = tmp_path / "number.json"
    path.write_text("42", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(app, ["migrate", str(path)])
    assert result.exit_code == 1
    assert "Error:" in result.output


def test_verbose_flag_enables_debug_logging(isolate_logging) -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["--verbose", "render", _fixture("normal-text.json")])
    assert result.exit_code == 0
    assert logging.getLogger().level == logging.DEBUG
