import sys
import unittest
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import AsyncMock

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_tailor.ai.gateway import invoke
from resume_tailor.ai.providers import claude_provider, openai_provider
from resume_tailor.ai.types import TextBlock, ToolInvocationBlock
from resume_tailor.core.errors import ModelError, model_error_kind


class ModelErrorKindTests(unittest.TestCase):
    def test_status_mapping(self):
        self.assertEqual(model_error_kind(None), "unknown")
        self.assertEqual(model_error_kind(401), "auth")
        self.assertEqual(model_error_kind(403), "auth")
        self.assertEqual(model_error_kind(429), "rate_limit")
        self.assertEqual(model_error_kind(400), "malformed_request")
        self.assertEqual(model_error_kind(422), "malformed_request")
        self.assertEqual(model_error_kind(408), "transient")
        self.assertEqual(model_error_kind(529), "transient")


class BlockConversionTests(unittest.TestCase):
    def test_claude_blocks(self):
        content = [
            SimpleNamespace(type="text", text="Here is the analysis"),
            SimpleNamespace(type="tool_use", name="job_analysis", input={"keywords": []}),
            SimpleNamespace(type="thinking", thinking="..."),
        ]
        self.assertEqual(
            claude_provider._to_blocks(content),
            (TextBlock(text="Here is the analysis"), ToolInvocationBlock(name="job_analysis", input={"keywords": []})),
        )

    def test_openai_blocks(self):
        message = SimpleNamespace(
            content=None,
            tool_calls=[
                SimpleNamespace(function=SimpleNamespace(name="ats_score_analysis", arguments='{"atsScore": 70}')),
                SimpleNamespace(function=SimpleNamespace(name="ats_score_analysis", arguments='{"atsScore": 7')),
            ],
        )
        self.assertEqual(
            openai_provider._to_blocks(message),
            (ToolInvocationBlock(name="ats_score_analysis", input={"atsScore": 70}), TextBlock(text='{"atsScore": 7')),
        )

    def test_missing_keys_raise_auth_errors(self):
        original_claude = claude_provider.settings
        original_openai = openai_provider.settings
        try:
            claude_provider.settings = SimpleNamespace(anthropic_api_key=None)
            openai_provider.settings = SimpleNamespace(openai_api_key=None, openai_base_url=None)
            with self.assertRaises(ModelError) as ctx:
                claude_provider.ClaudeProvider(model="claude-3-7-sonnet-20250219")
            self.assertEqual(ctx.exception.kind, "auth")
            with self.assertRaises(ModelError) as ctx:
                openai_provider.OpenAIProvider(model="gpt-4o-mini")
            self.assertEqual(ctx.exception.kind, "auth")
        finally:
            claude_provider.settings = original_claude
            openai_provider.settings = original_openai


class GatewayTests(unittest.IsolatedAsyncioTestCase):
    async def test_passes_capability_parameters(self):
        client = SimpleNamespace(complete=AsyncMock(return_value=[TextBlock(text="{}")]))
        message = await invoke(client, "ats_score", "prompt text")

        self.assertEqual(message, (TextBlock(text="{}"),))
        prompt, options = client.complete.await_args.args
        self.assertEqual(prompt, "prompt text")
        self.assertEqual(options.temperature, 0.2)
        self.assertEqual(options.max_tokens, 2048)
        self.assertEqual(options.tools[0].name, "ats_score_analysis")

    async def test_model_errors_pass_through(self):
        error = ModelError("bad key", kind="auth", status_code=401)
        client = SimpleNamespace(complete=AsyncMock(side_effect=error))
        with self.assertRaises(ModelError) as ctx:
            await invoke(client, "job_match", "prompt")
        self.assertIs(ctx.exception, error)

    async def test_other_errors_become_unknown(self):
        client = SimpleNamespace(complete=AsyncMock(side_effect=TimeoutError("late")))
        with self.assertRaises(ModelError) as ctx:
            await invoke(client, "job_match", "prompt")
        self.assertEqual(ctx.exception.kind, "unknown")
        self.assertIsInstance(ctx.exception.__cause__, TimeoutError)


if __name__ == "__main__":
    unittest.main()
