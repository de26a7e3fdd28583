"""Core pipeline for exprcalc: tokenizer, parser, evaluator, and configuration."""
