from __future__ import annotations
import argparse, json
from dataclasses import asdict
from .engine import Engine


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Find dotted key paths across JSON files")
    p.add_argument("--roots", nargs="+", required=True, help="Folders to scan for .json")
    g = p.add_mutually_exclusive_group(required=True)
    g.add_argument("--find", default=None, help="Exact dotted path to look up")
    g.add_argument("--suggest", default=None, help="Partial path to complete")
    g.add_argument("--check", default=None, help="Exit 0 if the text is a full root-anchored path")
    g.add_argument("--repl", action="store_true", help="Interactive loop: suggestions, then results")
    p.add_argument("--json", action="store_true", help="Emit JSON rows")
    p.add_argument("--verbose", action="store_true")

    args = p.parse_args(argv)

    eng = Engine()
    try:
        eng.build(roots=args.roots, verbose=args.verbose)

        def run_find(q: str) -> None:
            rows = eng.find(q)
            if args.json:
                print(json.dumps([asdict(r) for r in rows], ensure_ascii=False, indent=2))
                return
            if not rows:
                print("(no matches)"); return
            print("#  Line   Document                             Preview")
            for i, r in enumerate(rows, 1):
                print(f"{i:<2} {r.line_no:<6} {r.document_id:<36} {r.preview}")

        def run_suggest(q: str) -> None:
            rows = eng.suggest(q)
            if args.json:
                print(json.dumps(rows, ensure_ascii=False, indent=2))
                return
            if not rows:
                print("(no suggestions)"); return
            for r in rows:
                print(r)

        if args.find is not None:
            run_find(args.find)
        elif args.suggest is not None:
            run_suggest(args.suggest)
        elif args.check is not None:
            ok = eng.is_full_path(args.check)
            if args.json:
                print(json.dumps({"path": args.check, "valid": ok}))
            else:
                print("valid" if ok else "not a full path")
            return 0 if ok else 1
        else:
            print("Type a path (empty line to exit). End with '?' for suggestions.")
            while True:
                try:
                    q = input("> ").strip()
                except (EOFError, KeyboardInterrupt):
                    break
                if not q:
                    break
                if q.endswith("?"):
                    run_suggest(q[:-1])
                else:
                    run_find(q)

        return 0
    finally:
        eng.shutdown()


if __name__ == "__main__":
    raise SystemExit(main())
