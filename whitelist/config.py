"""
config.py - Environment configuration.

Values come from the process environment, optionally seeded from a .env
file in the working directory. Command-line flags override them.

  LOG_LEVEL        - logging level name (default: INFO)
  CHAIN_ID         - deployment folder under DEPLOYMENTS_DIR (default: 31337)
  DEPLOYMENTS_DIR  - root of per-chain deployment data (default: deployments)
  LANDS_FILE       - land list to read; defaults to the LandSale deployment file
  PROOF_WORKERS    - threads used to derive proofs (default: 1)
"""
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
CHAIN_ID = os.getenv("CHAIN_ID", "31337")
DEPLOYMENTS_DIR = Path(os.getenv("DEPLOYMENTS_DIR", "deployments"))
LANDS_FILE = os.getenv("LANDS_FILE", "")
PROOF_WORKERS = int(os.getenv("PROOF_WORKERS", "1"))

SALE_DEPLOYMENT = "LandSale"
PROOFS_FILENAME = "landsWithProof.json"
