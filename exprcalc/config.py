"""Configuration management for the calculator."""
import os
from dotenv import load_dotenv

load_dotenv()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Input limits applied before and during evaluation
MAX_EXPRESSION_LENGTH = int(os.getenv("MAX_EXPRESSION_LENGTH", "10000"))
MAX_NESTING_DEPTH = int(os.getenv("MAX_NESTING_DEPTH", "100"))

# Result rendering
RESULT_PRECISION = int(os.getenv("RESULT_PRECISION", "10"))
RESULT_LABEL = os.getenv("RESULT_LABEL", "Result: ")
