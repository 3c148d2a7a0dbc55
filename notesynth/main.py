from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
import uvicorn
import logging
import base64
import math

from notesynth import __version__
from notesynth.core.errors import SynthError
from notesynth.params.resolve import resolve_config
from notesynth.score.parser import parse_score
from notesynth.synth.render_core import render_to_bytes

# Configure Logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("notesynth")

app = FastAPI(
    title="notesynth",
    version=__version__,
    description="Score to WAV additive synthesis",
)

# CORS (Allow Frontend)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _json_safe(report: dict) -> dict:
    """Non-finite floats (e.g. -inf dBFS for silence) are not valid JSON."""
    return {
        k: (None if isinstance(v, float) and not math.isfinite(v) else v)
        for k, v in report.items()
    }


@app.get("/health")
async def health_check():
    return {"status": "ok", "service": "notesynth"}


@app.post("/render")
def render(request: dict):
    """
    Renders a score.
    Body: {"score": "<score text>", "params": {...config overrides}}
    Returns JSON with base64-encoded WAV, note/sample counts and a QC report.
    """
    text = request.get("score")
    if not isinstance(text, str):
        raise HTTPException(status_code=422, detail="'score' must be the score text")

    try:
        config = resolve_config(request.get("params") or {})
        score = parse_score(text)
        wav_bytes, info = render_to_bytes(score, config, qc=True)
    except SynthError as e:
        logger.warning("Render failed: %s: %s", type(e).__name__, e)
        raise HTTPException(status_code=422, detail=f"{type(e).__name__}: {e}") from e

    return {
        "audio": base64.b64encode(wav_bytes).decode("utf-8"),
        "notes": info["notes"],
        "num_samples": info["num_samples"],
        "qc": _json_safe(info["qc"]),
    }


if __name__ == "__main__":
    uvicorn.run("notesynth.main:app", host="0.0.0.0", port=8000, reload=True)
