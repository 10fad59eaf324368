"""
Demo script to exercise the CodeGenie pipeline.

Runs the comment and sanitization steps offline, then tries one round trip
against the completion endpoint (set CODEGENIE_ENDPOINT to point elsewhere).
"""

import os
import sys

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from codegenie.autocomplete import extract_only_code, find_last_comment
from codegenie.config import Config
from codegenie.llm import CompletionClient


SOURCE = """import math

def area(r):
    return math.pi * r ** 2

# print the area of circles with radius 1 to 5
"""

MODEL_ANSWER = """# Here is a loop that prints the areas:
for r in range(1, 6):
    print(r, area(r))

// Each iteration calls area() once.
"""


def demo_offline():
    """Comment detection and response sanitization, no network"""
    print("=" * 60)
    print("DEMO 1: Offline pipeline steps")
    print("=" * 60)

    prompt = find_last_comment(SOURCE.split("\n"))
    print(f"Detected prompt: {prompt!r}")
    print("Sanitized answer:")
    print(extract_only_code(MODEL_ANSWER))


def demo_endpoint():
    """One request against the configured endpoint"""
    print("=" * 60)
    print("DEMO 2: Endpoint round trip")
    print("=" * 60)

    config = Config()
    client = CompletionClient(config)
    print(f"Endpoint: {config.endpoint}")

    result = client.complete("write a function that reverses a string")
    if result.is_empty:
        reason = result.reason.value if result.reason else "no code in response"
        print(f"No completion ({reason})")
    else:
        print(result.text)


if __name__ == "__main__":
    demo_offline()
    print()
    demo_endpoint()
