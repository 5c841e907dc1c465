#!/usr/bin/env python3
"""
Batch normalize node types in every workflow JSON file of a folder
"""

import sys
import json
import logging
import argparse
from pathlib import Path
from typing import Any, Dict, Tuple

from tqdm import tqdm

from n8n_node_types.config import configure_logging
from n8n_node_types.services.node_type_normalizer import NodeTypeNormalizer

logger = logging.getLogger(__name__)

def count_changed_nodes(original: Any, normalized: Any) -> int:
    """Number of nodes whose type differs between two versions of a workflow"""
    if not isinstance(original, dict) or not isinstance(normalized, dict):
        return 0
    before = original.get("nodes")
    after = normalized.get("nodes")
    if not isinstance(before, list) or not isinstance(after, list):
        return 0
    return sum(
        1 for old, new in zip(before, after)
        if isinstance(old, dict) and isinstance(new, dict) and old.get("type") != new.get("type")
    )

def normalize_workflow_data(data: Any) -> Tuple[Any, int]:
    """Normalize one workflow or a list of workflows (n8n export --all format)"""
    if isinstance(data, list):
        normalized = [NodeTypeNormalizer.normalize_workflow_node_types(item) for item in data]
        changed = sum(count_changed_nodes(old, new) for old, new in zip(data, normalized))
        return normalized, changed

    normalized = NodeTypeNormalizer.normalize_workflow_node_types(data)
    return normalized, count_changed_nodes(data, normalized)

def process_directory(input_dir: Path, output_dir: Path = None, check_only: bool = False) -> Dict[str, Any]:
    """
    Normalize all *.json workflows under input_dir.

    Results go to output_dir (same file names); when output_dir is None the
    files are rewritten in place. With check_only nothing is written.
    """
    json_files = sorted(input_dir.glob("*.json"))
    summary = {
        "total_files": len(json_files),
        "changed_files": [],
        "changed_nodes": 0,
        "errors": {},
    }

    if output_dir is not None and not check_only:
        output_dir.mkdir(parents=True, exist_ok=True)

    for json_file in tqdm(json_files, desc="Normalizing workflows", disable=not json_files):
        try:
            with open(json_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            # ValueError covers both invalid JSON and invalid UTF-8
            logger.error(f"Could not read {json_file.name}: {e}")
            summary["errors"][json_file.name] = str(e)
            continue

        normalized, changed = normalize_workflow_data(data)
        if changed:
            summary["changed_files"].append(json_file.name)
            summary["changed_nodes"] += changed
        logger.debug(f"{json_file.name}: {changed} node types normalized")

        # Unchanged files are only copied when writing to a separate folder
        if check_only or (output_dir is None and not changed):
            continue

        target = (output_dir / json_file.name) if output_dir is not None else json_file
        try:
            with open(target, "w", encoding="utf-8") as f:
                json.dump(normalized, f, indent=2, ensure_ascii=False)
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Could not write {target}: {e}")
            summary["errors"][json_file.name] = str(e)

    return summary

def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Normalize n8n node types in workflow JSON files")
    parser.add_argument("input_dir", type=Path, help="Folder containing workflow JSON files")
    parser.add_argument("--output-dir", type=Path, default=None, help="Where to write normalized workflows")
    parser.add_argument("--in-place", action="store_true", help="Rewrite the input files")
    parser.add_argument("--check", action="store_true", help="Only report files that would change")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging (DEBUG level)")

    args = parser.parse_args(argv)
    configure_logging("DEBUG" if args.verbose else None)

    if not args.input_dir.is_dir():
        print(f"❌ Input directory not found: {args.input_dir}")
        return 2

    if not args.check and not args.in_place and args.output_dir is None:
        parser.error("either --output-dir, --in-place or --check is required")

    output_dir = None if args.in_place else args.output_dir
    print(f"🔄 Normalizing workflows in {args.input_dir}...")
    summary = process_directory(args.input_dir, output_dir=output_dir, check_only=args.check)

    if summary["total_files"] == 0:
        print("ℹ️ No JSON files found")
        return 0

    for name in summary["changed_files"]:
        print(f"   ✏️ {name}")

    print(f"\n🎯 Normalization complete!")
    print(f"   📊 Total files: {summary['total_files']}")
    print(f"   ✏️ Files with short-form node types: {len(summary['changed_files'])}")
    print(f"   🔧 Node types normalized: {summary['changed_nodes']}")
    print(f"   ❌ Failed to process: {len(summary['errors'])} files")

    if summary["errors"]:
        return 1
    if args.check and summary["changed_files"]:
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())
