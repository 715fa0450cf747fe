import json

import httpx
import pytest
from fastapi.testclient import TestClient

from quiz_relay.api.submit import get_telegram_client
from quiz_relay.core.config import Settings, get_settings
from quiz_relay.main import app
from quiz_relay.services.telegram import TelegramClient

PRIVATE_CHAT = "111111"
GROUP_CHAT = "-100222"


class FakeTelegram:
    """Stand-in for the Bot API; records every sendMessage payload."""

    def __init__(self, fail_chat=None, status=400, description="Bad Request: chat not found"):
        self.calls = []
        self.fail_chat = fail_chat
        self.status = status
        self.description = description

    def __call__(self, request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        self.calls.append({'url': str(request.url), **payload})
        if payload['chat_id'] == self.fail_chat:
            body = {'ok': False, 'error_code': self.status}
            if self.description:
                body['description'] = self.description
            return httpx.Response(self.status, json=body)
        return httpx.Response(200, json={'ok': True, 'result': {'message_id': len(self.calls)}})

    def transport(self):
        return httpx.MockTransport(self)


def make_submission(n_answers=5, **overrides):
    answers = []
    for i in range(n_answers):
        answers.append({
            'directSpeech': f'"I am tired," she said. ({i + 1})',
            'question': 'She said that...',
            'userAnswer': 'she was tired' if i % 2 == 0 else '',
            'correctAnswer': 'she was tired',
            'isCorrect': i % 2 == 0,
        })
    data = {
        'studentName': 'Alex Smith',
        'timestamp': 1705314600000,
        'timeSpent': 125,
        'score': 60,
        'correctAnswers': 3,
        'totalQuestions': n_answers,
        'answers': answers,
    }
    data.update(overrides)
    return data


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        bot_token='123:TEST',
        private_chat_id=PRIVATE_CHAT,
        group_chat_id=GROUP_CHAT,
        chunk_delay=0,
    )


@pytest.fixture
def telegram():
    return FakeTelegram()


@pytest.fixture
def client(settings, telegram):
    def _client():
        return TelegramClient(
            bot_token=settings.bot_token or '',
            api_base=settings.telegram_api_base,
            limit=settings.message_limit,
            delay=settings.chunk_delay,
            transport=telegram.transport(),
        )

    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_telegram_client] = _client
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
