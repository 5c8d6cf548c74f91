"""CLI entry point for gemini-client.

Small demonstration harness over GeminiClient.

Entry point:
    gemini-client models [--json]
    gemini-client generate --prompt <text> [--model <name>] [--stream] [--image <path>]
    gemini-client count-tokens --prompt <text> [--model <name>]
"""

import argparse
import asyncio
import base64
import json
import logging
import mimetypes
import sys
from contextlib import aclosing
from typing import Optional

from gemini_client.client import GeminiClient
from gemini_client.config import get_default_model
from gemini_client.content import GenerativeModel, MediaData, Role, TextAndMediaTurn, TextTurn
from gemini_client.errors import GeminiError

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────
# ARGUMENT PARSING
# ─────────────────────────────────────────────────────────────────────


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gemini-client",
        description="Command-line access to the Gemini API.",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    sub = parser.add_subparsers(dest="command")

    # models
    models_p = sub.add_parser("models", help="List available models")
    models_p.add_argument(
        "--json", action="store_true", dest="json_output",
        help="Full JSON output (one object per model)",
    )

    # generate
    gen_p = sub.add_parser("generate", help="Generate content for a prompt")
    gen_p.add_argument("--prompt", required=True, help="User prompt")
    gen_p.add_argument("--model", default=None, help="Model name (default: GEMINI_MODEL)")
    gen_p.add_argument("--stream", action="store_true", help="Stream the response")
    gen_p.add_argument("--image", default=None, help="Image file to attach")

    # count-tokens
    count_p = sub.add_parser("count-tokens", help="Count prompt tokens")
    count_p.add_argument("--prompt", required=True, help="User prompt")
    count_p.add_argument("--model", default=None, help="Model name (default: GEMINI_MODEL)")

    return parser


def _encode_image(image_path: str) -> MediaData:
    """Read an image file as base64 media."""
    mime_type, _ = mimetypes.guess_type(image_path)
    if not mime_type:
        mime_type = "image/png"

    with open(image_path, "rb") as f:
        data = base64.b64encode(f.read()).decode("utf-8")

    return MediaData(mime_type=mime_type, data=data)


def _build_model(prompt: str, model_name: Optional[str], image_path: Optional[str] = None) -> GenerativeModel:
    if image_path:
        turn = TextAndMediaTurn(role=Role.USER, text=prompt, media=[_encode_image(image_path)])
    else:
        turn = TextTurn(role=Role.USER, text=prompt)
    return GenerativeModel(model_name=model_name or get_default_model(), contents=[turn])


# ─────────────────────────────────────────────────────────────────────
# COMMANDS
# ─────────────────────────────────────────────────────────────────────


async def _cmd_models(client: GeminiClient, json_output: bool = False) -> int:
    """List available models. Returns exit code."""
    models = await client.list_models()

    if json_output:
        json.dump([m.model_dump(by_alias=True, exclude_none=True) for m in models], sys.stdout, indent=2)
        sys.stdout.write("\n")
    else:
        for model in models:
            print(model.name)

    return 0


async def _cmd_generate(client: GeminiClient, model: GenerativeModel, stream: bool = False) -> int:
    """Generate and print a response, then its usage metadata on stderr."""
    if stream:
        request_id = None
        async with aclosing(client.generate_stream(model)) as chunks:
            async for chunk in chunks:
                request_id = chunk.id
                sys.stdout.write(chunk.text)
                sys.stdout.flush()
        sys.stdout.write("\n")
    else:
        result = await client.generate(model)
        request_id = result.id
        print(result.text)

    if request_id is not None:
        usage = client.usage_metadata(request_id)
        if usage is not None:
            print(
                f"tokens: prompt={usage.prompt_token_count} "
                f"candidates={usage.candidates_token_count} total={usage.total_token_count}",
                file=sys.stderr,
            )
        for rating in client.safety_ratings(request_id):
            print(f"safety: {rating.category}={rating.probability}", file=sys.stderr)

    return 0


async def _cmd_count_tokens(client: GeminiClient, model: GenerativeModel) -> int:
    print(await client.count_tokens(model))
    return 0


async def _run(args: argparse.Namespace) -> int:
    async with GeminiClient() as client:
        try:
            if args.command == "models":
                return await _cmd_models(client, json_output=args.json_output)
            elif args.command == "generate":
                model = _build_model(args.prompt, args.model, args.image)
                return await _cmd_generate(client, model, stream=args.stream)
            elif args.command == "count-tokens":
                return await _cmd_count_tokens(client, _build_model(args.prompt, args.model))
        except GeminiError as e:
            logger.debug("Command failed", exc_info=True)
            print(f"Error: {e}", file=sys.stderr)
            return 1
    return 1


# ─────────────────────────────────────────────────────────────────────
# ENTRY POINT
# ─────────────────────────────────────────────────────────────────────


def main():
    parser = _build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    # Logging
    level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(name)s %(message)s", stream=sys.stderr)

    # Load env
    from dotenv import load_dotenv
    load_dotenv()

    try:
        code = asyncio.run(_run(args))
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        code = 1

    sys.exit(code)


if __name__ == "__main__":
    main()
