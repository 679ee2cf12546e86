from unittest.mock import patch, MagicMock

from api_linter.config import DEFAULT_MODEL
from api_linter.llm import LlmClient


def _response(text):
    mock_resp = MagicMock()
    mock_resp.choices = [MagicMock()]
    mock_resp.choices[0].message.content = text
    return mock_resp


class TestLlmClient:
    def test_default_model(self):
        client = LlmClient()
        assert client.model == DEFAULT_MODEL

    def test_custom_model(self):
        client = LlmClient(model="gpt-4o")
        assert client.model == "gpt-4o"

    @patch("api_linter.llm.completion")
    def test_call_returns_content(self, mock_completion):
        mock_completion.return_value = _response("Add a 404 response.")

        client = LlmClient(model="gpt-4o")
        result = client.call(system="You are helpful.", user="Hello")
        assert result == "Add a 404 response."
        mock_completion.assert_called_once()

    @patch("api_linter.llm.completion")
    def test_call_passes_model_and_messages(self, mock_completion):
        mock_completion.return_value = _response("ok")

        client = LlmClient(model="gpt-4o-mini", max_tokens=256)
        client.call(system="sys", user="usr")

        call_kwargs = mock_completion.call_args[1]
        assert call_kwargs["model"] == "gpt-4o-mini"
        assert call_kwargs["max_tokens"] == 256
        messages = call_kwargs["messages"]
        assert messages[0] == {"role": "system", "content": "sys"}
        assert messages[1] == {"role": "user", "content": "usr"}
