from __future__ import annotations
import argparse, json, sys
from limbu_suggest import Engine, BuildFailure
from limbu_suggest.config import TOP_K, DICTIONARY_URL

def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Limbu suggestion CLI (Engine-backed)")
    p.add_argument("--source", default=DICTIONARY_URL, help="Dictionary URL or local JSON file")
    p.add_argument("--timeout", type=float, default=None, help="Fetch timeout in seconds")
    p.add_argument("-k", type=int, default=TOP_K, help="Suggestions per query")
    p.add_argument("--q", default=None, help="Single query to run once")
    p.add_argument("--lookup", default=None, help="Exact-match a single word")
    p.add_argument("--repl", action="store_true", help="Interactive loop after loading")
    p.add_argument("--json", action="store_true", help="Emit JSON rows")
    p.add_argument("--verbose", action="store_true")

    args = p.parse_args(argv)

    eng = Engine()
    try:
        try:
            idx = eng.load(args.source, timeout=args.timeout, verbose=args.verbose)
        except BuildFailure as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 1
        if idx is not None and args.verbose:
            s = idx.stats
            print(f"[ready] words={s.indexed:,} dropped={s.dropped:,} duplicates={s.duplicates:,}")

        def show(rows):
            if args.json:
                print(json.dumps([r.to_dict() for r in rows], ensure_ascii=False, indent=2))
                return
            if not rows:
                print("(no matches)"); return
            print("#  Limbu            Phonetic         English / Nepali")
            for i, r in enumerate(rows, 1):
                print(f"{i:<2} {r.script_form:<16} {r.phonetic:<16} {r.meanings.en} / {r.meanings.ne}")

        def run_query(q: str):
            show(eng.suggest_for_input(q, args.k))

        if args.q:
            run_query(args.q)

        if args.lookup:
            hit = eng.lookup(args.lookup)
            show([hit] if hit is not None else [])

        if args.repl:
            print("Type Limbu text (empty line to exit).")
            while True:
                try:
                    q = input("> ").strip()
                except (EOFError, KeyboardInterrupt):
                    break
                if not q:
                    break
                run_query(q)

        return 0
    finally:
        eng.shutdown()

if __name__ == "__main__":
    raise SystemExit(main())
