"""Tests for per-criterion prompt construction."""

import pytest

from projects.assignreview.architecture import Criterion, Prompt, PromptBuilder, ReviewRequest


def _request(**overrides):
    fields = {
        "file_path": "/p/src/app.ts",
        "code_file": "export const app = 1;",
        "requirements": "Use TypeScript.",
        "file_tree": "/p/src/app.ts\n/p/src/db.ts",
    }
    fields.update(overrides)
    return ReviewRequest(**fields)


class TestCriterion:
    """Test Criterion parsing."""

    def test_parse_values(self):
        assert Criterion.parse("logic") is Criterion.LOGIC
        assert Criterion.parse(Criterion.EFFICIENCY) is Criterion.EFFICIENCY

    def test_parse_unknown(self):
        with pytest.raises(ValueError, match="Unsupported criterion"):
            Criterion.parse("style")


class TestPromptBuilder:
    """Test PromptBuilder.build."""

    @pytest.mark.parametrize("criterion", [c.value for c in Criterion])
    def test_fields_substituted(self, criterion):
        prompt = PromptBuilder.create().build(criterion, [_request()])
        assert isinstance(prompt, Prompt)
        assert f"# Criterion: {criterion}" in prompt.user
        assert "/p/src/app.ts" in prompt.user
        assert "export const app = 1;" in prompt.user
        assert "Use TypeScript." in prompt.user
        assert "/p/src/app.ts\n/p/src/db.ts" in prompt.user
        for token in ("`file_path`", "`code_file`", "`requirements`", "`file_tree`", "`syntax_outline`"):
            assert token not in prompt.user

    def test_system_prompt_names_criterion(self):
        prompt = PromptBuilder.create().build(Criterion.ACCURACY, [_request()])
        assert "through the lens of accuracy" in prompt.system
        assert '"review"' in prompt.system and '"flag"' in prompt.system and '"func"' in prompt.system

    def test_substituted_content_not_rescanned(self):
        code = "const s = '`requirements`';"
        prompt = PromptBuilder.create().build("logic", [_request(code_file=code)])
        assert code in prompt.user

    def test_syntax_outline_placeholder(self):
        builder = PromptBuilder.create()
        assert "(not available)" in builder.build("logic", [_request()]).user
        outlined = builder.build("logic", [_request(syntax_outline="1: export_statement app")]).user
        assert "1: export_statement app" in outlined
        assert "(not available)" not in outlined

    def test_unknown_criterion(self):
        with pytest.raises(ValueError):
            PromptBuilder.create().build("style", [_request()])

    @pytest.mark.parametrize("context", [[], [_request(), _request()]])
    def test_context_must_hold_one_request(self, context):
        with pytest.raises(ValueError, match="exactly one"):
            PromptBuilder.create().build("logic", context)

    def test_custom_template_folder(self, tmp_path):
        from projects.assignreview.prompt import ThePromptBuilder

        (tmp_path / "system.md").write_text("judge `criterion`", encoding="utf-8")
        (tmp_path / "logic.md").write_text("`file_path`|`code_file`", encoding="utf-8")
        prompt = ThePromptBuilder(str(tmp_path)).build("logic", [_request()])
        assert prompt == Prompt(system="judge logic", user="/p/src/app.ts|export const app = 1;")
