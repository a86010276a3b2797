import argparse
import asyncio
import sys
from pathlib import Path

import httpx

from imagechat.client.session import ImageChatSession
from imagechat.client.view import build_view, render_text
from imagechat.config import get_ui_config

DEFAULT_API_URL = "http://localhost:8000"

HELP = """Commands:
  /image PATH   select an image
  /process      extract text and describe the selected image
  /lang CODE    set the description language
  /dismiss      clear the current error
  /quit         exit
Anything else is sent as a chat message."""


async def handle_line(session: ImageChatSession, line: str) -> bool:
    """Apply one line of input to the session. Returns False to stop."""
    command, _, arg = line.strip().partition(" ")
    if command == "/quit":
        return False
    if command == "/help":
        print(HELP)
    elif command == "/image":
        await session.select_file(Path(arg.strip()).expanduser())
    elif command == "/process":
        await session.process_image()
    elif command == "/lang":
        codes = {lang.code for lang in session.ui_config.languages}
        if arg.strip() in codes:
            session.select_language(arg.strip())
        else:
            print(f"Unknown language. Choose one of: {', '.join(sorted(codes))}", file=sys.stderr)
    elif command == "/dismiss":
        session.dismiss_error()
    else:
        await session.send_message(line)
    return True


async def run(args: argparse.Namespace) -> None:
    ui_config = get_ui_config()
    async with httpx.AsyncClient(base_url=args.api_url, timeout=None) as http:
        session = ImageChatSession(http, ui_config=ui_config, language=args.language)
        session.store.subscribe(lambda state: print(render_text(build_view(state, ui_config, args.theme)) + "\n"))

        print(render_text(build_view(session.state, ui_config, args.theme)))
        print(HELP)
        if args.image:
            await session.select_file(Path(args.image))

        while True:
            try:
                line = await asyncio.to_thread(input, "> ")
            except EOFError:
                break
            if line.strip() and not await handle_line(session, line):
                break


def main():
    parser = argparse.ArgumentParser(description="Chat about an image from the terminal")
    parser.add_argument("--api-url", type=str, default=DEFAULT_API_URL, help="Base URL of the image chat server")
    parser.add_argument("--image", type=str, help="Path to an image to select on start", required=False)
    parser.add_argument("--language", type=str, default="en", help="Description language code")
    parser.add_argument("--theme", type=str, default=None, help="Palette name (light or dark)")
    args = parser.parse_args()

    try:
        asyncio.run(run(args))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
