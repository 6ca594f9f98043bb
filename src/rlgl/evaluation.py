"""Upload a test-result artifact and ask the server for a verdict.

An evaluation is two calls against the configured host:
1. POST /upload with the artifact as multipart field `bin`; the body that
   comes back is an opaque reference to the stored artifact.
2. POST /evaluate with {policy, id, name, ref, title?} as JSON; the body
   that comes back is a text verdict prefixed with `GREEN:` or `RED:`.
"""
import logging
import os

from .client import RlglClient
from .models import EvaluationRequest, SessionConfig, Verdict

logger = logging.getLogger(__name__)

PASS_PREFIX = "GREEN:"
FAIL_PREFIX = "RED:"


def upload(client: RlglClient, config: SessionConfig, file_path: str) -> str:
    with open(file_path, "rb") as f:
        files = {"bin": (os.path.basename(file_path), f)}
        resp = client.request("POST", f"{config.host}/upload", token=config.key, files=files)
    try:
        ref = resp.content.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ValueError(f"upload returned a reference that is not UTF-8: {resp.content!r}") from e
    logger.info("Uploaded %s as %r", file_path, ref)
    return ref


def evaluate(
    client: RlglClient,
    config: SessionConfig,
    policy: str,
    player_id: str,
    title: str,
    ref: str,
) -> str:
    request = EvaluationRequest(policy=policy, id=player_id, ref=ref, title=title or None)
    resp = client.request(
        "POST",
        f"{config.host}/evaluate",
        token=config.key,
        content=request.to_json().encode("utf-8"),
        content_type="application/json",
    )
    return resp.text


def classify(text: str) -> Verdict:
    if text.startswith(PASS_PREFIX):
        return Verdict.PASS
    if text.startswith(FAIL_PREFIX):
        return Verdict.FAIL
    return Verdict.UNKNOWN


def submit(
    client: RlglClient,
    config: SessionConfig,
    policy: str,
    player_id: str,
    title: str,
    artifact_path: str,
) -> str:
    """Upload `artifact_path` and evaluate it against `policy`."""
    ref = upload(client, config, artifact_path)
    return evaluate(client, config, policy, player_id, title, ref)
