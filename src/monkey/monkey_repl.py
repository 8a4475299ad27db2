import io
import traceback

from monkey.monkey_cli import print_parse_errors
from monkey.monkey_lexer import CharacterStream, Lexer
from monkey.monkey_parser import Parser

PROMPT = ">> "


def print_traceback() -> None:
    buf = io.StringIO()
    traceback.print_exc(file=buf)
    print("[error] >>>")
    print(buf.getvalue())


def start_repl(trace: bool = False) -> None:
    print("Monkey REPL. Type 'exit' or 'quit' to leave.")

    while True:
        try:
            src = input(PROMPT).strip()
            if src in ("exit", "quit"):
                print("Exiting Monkey REPL.")
                return
            if not src:
                continue
            if src.lower() == "trace-mode":
                trace = not trace
                print(f"[mode] >>> Trace mode {'ON' if trace else 'OFF'}")
                continue

            try:
                parser = Parser(Lexer(CharacterStream(src)), trace=trace)
                program = parser.parse_program()
            except Exception:
                print_traceback()
                continue

            if parser.errors:
                print_parse_errors(parser.errors)
                continue
            print(program)

        except (KeyboardInterrupt, EOFError):
            print("\nExiting Monkey REPL.")
            break


def main() -> None:
    start_repl()


if __name__ == "__main__":
    main()
