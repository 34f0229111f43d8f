"""
Operations utility - command line access to a named document store.
"""

import argparse
import json
import sys

from .core.config import DEFAULT_TOP_K, get_embedding_provider, validate_config
from .vector.document_store import DocumentStore


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="embedstore", description="Embedstore document store utility")
    parser.add_argument("--store", default="default", help="Store name (default: default)")
    parser.add_argument("--store-dir", default=None, help="Directory holding store files (default: STORE_DIR)")
    parser.add_argument("--provider", default=None, help="Embedding provider: char, hash or sentence-transformers")
    parser.add_argument("--dimension", type=int, default=None, help="Embedding dimension for stub providers")

    subparsers = parser.add_subparsers(dest="command", required=True)

    add_parser = subparsers.add_parser("add", help="Add or replace a document")
    add_parser.add_argument("doc_id")
    add_parser.add_argument("text")

    search_parser = subparsers.add_parser("search", help="Search for similar documents")
    search_parser.add_argument("query")
    search_parser.add_argument("-k", "--top-k", type=int, default=DEFAULT_TOP_K)

    delete_parser = subparsers.add_parser("delete", help="Delete a document")
    delete_parser.add_argument("doc_id")

    subparsers.add_parser("count", help="Show the number of documents")
    subparsers.add_parser("clear", help="Remove every document")
    subparsers.add_parser("compact", help="Reclaim disk space")
    subparsers.add_parser("health", help="Show store health")

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    issues = validate_config()
    if issues:
        for issue in issues:
            print(f"ERROR: {issue}", file=sys.stderr)
        return 1

    try:
        embedder = get_embedding_provider(args.provider, dimension=args.dimension)
    except ValueError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    with DocumentStore.open(args.store, embedder, store_dir=args.store_dir) as store:
        if not store.is_initialized():
            print(f"ERROR: Store '{args.store}' could not be initialized", file=sys.stderr)
            return 1

        if args.command == "add":
            ok = store.add_document(args.doc_id, args.text)
            print("added" if ok else "rejected")
            return 0 if ok else 1

        if args.command == "search":
            results = store.search(args.query, args.top_k)
            for result in results:
                print(f"{result.score:.6f}\t{result.id}\t{result.text}")
            return 0

        if args.command == "delete":
            ok = store.delete_document(args.doc_id)
        elif args.command == "clear":
            ok = store.clear()
        elif args.command == "compact":
            ok = store.compact()
        elif args.command == "count":
            print(store.count())
            return 0
        else:
            print(json.dumps(store.health(), indent=2))
            return 0

        print("ok" if ok else "failed")
        return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
