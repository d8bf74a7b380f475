"""Live tests against YouTube. Run with: pytest -m integration"""

import asyncio

import pytest

from tdg.captions.source import fetch_catalog, make_client
from tdg.captions.strategies import acquire_transcript
from tdg.core.config import CaptionsConfig
from tdg.detection.language import detect_language

pytestmark = pytest.mark.integration

# "Me at the zoo", which has English captions
VIDEO_ID = "jNQXAC9IVRw"


def test_live_transcript():
    transcript = asyncio.run(acquire_transcript(VIDEO_ID, config=CaptionsConfig()))
    assert not transcript.is_empty()
    assert transcript.text.startswith("[0:0")


def test_live_detection():
    async def run():
        async with make_client(CaptionsConfig()) as client:
            catalog = await fetch_catalog(client, VIDEO_ID)
        return detect_language(catalog)

    code = asyncio.run(run())
    assert code and code == code.lower()
