from fastapi import FastAPI, HTTPException
import json
import os
from pathlib import Path

app = FastAPI(title="Mock Rates Server", version="1.0.0")
# Optional override file: {"rates": {"USD": 0.0119, ...}} (foreign units per 1 INR)
RATES_FILE = Path(os.environ.get("MOCK_RATES_FILE", "/rates_stub/latest_inr.json"))

DEFAULT_RATES = {
    "USD": 0.011905,  # ~84.00 INR
    "EUR": 0.010989,  # ~91.00 INR
    "GBP": 0.009434,  # ~106.00 INR
    "AED": 0.043716,
    "SGD": 0.015873,
    "AUD": 0.018182,
    "CAD": 0.016393,
}


@app.get("/health")
def health(): return {"status": "ok"}


@app.get("/latest/{base}")
def latest(base: str):
    if base.upper() != "INR":
        raise HTTPException(status_code=404, detail="only INR base is served")
    if RATES_FILE.exists():
        return json.loads(RATES_FILE.read_text())
    return {"base": "INR", "rates": DEFAULT_RATES}
