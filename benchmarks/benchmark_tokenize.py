"""Benchmark chatmark tokenizing and rendering over a synthetic chat history.

Run with:
    python benchmarks/benchmark_tokenize.py
"""

import time

from chatmark import DictTokenCache, HtmlRenderer, is_emoji_only, tokenize


def chat_history(size: int = 2000) -> list[str]:
    """Generate chat messages mixing every construct."""
    patterns = [
        "gg **well played** <@{i}>",
        "<:pog:{i}> <a:dance:{i}>",
        "check https://cdn.example.com/clips/{i}.mp4 and https://example.com/page/{i}.",
        "> quoting message {i}\nreply with *emphasis* and ~~strike~~",
        "```py\ndef f_{i}():\n    return {i}\n```",
        "[docs](https://docs.example.com/{i}) vs [bad](javascript:alert({i}))",
        "plain message number {i} with no markup at all, just words",
        "\U0001f389\U0001f389\U0001f389",
    ]
    return [patterns[i % len(patterns)].format(i=i) for i in range(size)]


def benchmark(label: str, fn, messages: list[str], iterations: int = 10) -> float:
    # Warmup
    for message in messages[:50]:
        fn(message)

    start = time.perf_counter()
    for _ in range(iterations):
        for message in messages:
            fn(message)
    elapsed = (time.perf_counter() - start) / iterations
    print(f"{label:<24} {elapsed * 1000:8.2f} ms / {len(messages)} messages")
    return elapsed


def main() -> None:
    messages = chat_history()
    renderer = HtmlRenderer()
    cache = DictTokenCache()

    print("=" * 60)
    benchmark("tokenize", tokenize, messages)
    benchmark("tokenize (cached)", lambda m: tokenize(m, cache=cache), messages)
    benchmark("is_emoji_only", is_emoji_only, messages)
    benchmark("tokenize + render", lambda m: renderer.render(tokenize(m)), messages)
    print("=" * 60)


if __name__ == "__main__":
    main()
