"""Unit tests for the Gemini client wrapper."""

import pytest
from unittest.mock import Mock, PropertyMock, patch
import sys
import os

# Add src directory to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'src'))

from insights.gemini_client import GeminiClient
from shared.exceptions import AIServiceError


class TestGeminiClient:
    """Test cases for GeminiClient."""

    @pytest.fixture
    def genai(self):
        with patch('insights.gemini_client.genai') as genai:
            yield genai

    @pytest.fixture
    def model(self, genai):
        return genai.GenerativeModel.return_value

    def test_configures_model(self, genai):
        client = GeminiClient(api_key='key', model_name='gemini-test', timeout=5)

        assert client.configured is True
        genai.configure.assert_called_once_with(api_key='key')
        genai.GenerativeModel.assert_called_once_with('gemini-test')

    def test_generate_text(self, genai, model):
        model.generate_content.return_value = Mock(text='  {"category": "Travel"}\n')
        client = GeminiClient(api_key='key', timeout=12)

        text = client.generate_text('Categorize this')

        assert text == '{"category": "Travel"}'
        model.generate_content.assert_called_once_with(
            'Categorize this',
            request_options={'timeout': 12}
        )

    def test_without_api_key(self, genai):
        with patch('insights.gemini_client.config.GEMINI_API_KEY', None):
            client = GeminiClient()

        assert client.configured is False
        genai.configure.assert_not_called()

        with pytest.raises(AIServiceError, match="not configured"):
            client.generate_text('Categorize this')

    def test_wraps_sdk_errors(self, genai, model):
        model.generate_content.side_effect = RuntimeError('503 Service Unavailable')
        client = GeminiClient(api_key='key')

        with pytest.raises(AIServiceError) as exc_info:
            client.generate_text('Categorize this')

        assert '503 Service Unavailable' in exc_info.value.message

    def test_wraps_blocked_response(self, genai, model):
        # .text raises when the candidate was blocked
        response = Mock()
        type(response).text = PropertyMock(side_effect=ValueError('no text parts'))
        model.generate_content.return_value = response
        client = GeminiClient(api_key='key')

        with pytest.raises(AIServiceError):
            client.generate_text('Categorize this')

    @pytest.mark.parametrize('text', ['', '   \n', None])
    def test_empty_response(self, genai, model, text):
        model.generate_content.return_value = Mock(text=text)
        client = GeminiClient(api_key='key')

        with pytest.raises(AIServiceError, match="empty response"):
            client.generate_text('Categorize this')
