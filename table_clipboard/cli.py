"""테이블 클립보드 코덱 실행 스크립트

사용법:
    table-clipboard export data.json                    # 2D 배열 → HTML
    table-clipboard export settings.json --column-headers --row-headers
    table-clipboard export data.json --selection 0 0 4 2 -o clip.html
    table-clipboard import clip1.html clip2.html -o settings.json
"""
import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError
from tqdm import tqdm

from table_clipboard.config import LOG_DATEFMT, LOG_FORMAT, LOG_LEVEL
from table_clipboard.exporter import data_to_html, selection_to_html
from table_clipboard.grid_view import InMemoryGrid
from table_clipboard.importer import html_to_grid_settings
from table_clipboard.schemas import ExportOptions

logger = logging.getLogger(__name__)


def _print(message: str = "") -> None:
    # stdout 은 결과(HTML/JSON) 전용
    print(message, file=sys.stderr)


def _uses_grid_options(args: argparse.Namespace) -> bool:
    return bool(
        args.selection or args.column_headers or args.row_headers or args.first_level_only
        or args.rows_limit is not None or args.columns_limit is not None
    )


def _write_output(text: str, output: Path | None) -> None:
    if output is None:
        sys.stdout.write(text + "\n")
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    with open(output, "w", encoding="utf-8") as f:
        f.write(text)
    _print(f"  저장: {output}")


def run_export(args: argparse.Namespace) -> int:
    """JSON(2D 배열 또는 그리드 설정) → 클립보드 HTML"""
    try:
        with open(args.input, "r", encoding="utf-8") as f:
            payload = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"입력 파일 읽기 실패: {args.input} ({e})")
        return 1

    if isinstance(payload, list) and not _uses_grid_options(args):
        _write_output(data_to_html(payload), args.output)
        return 0

    try:
        grid = InMemoryGrid(payload) if isinstance(payload, list) else InMemoryGrid.from_settings(payload)
        options = ExportOptions(
            with_column_headers=args.column_headers,
            with_row_headers=args.row_headers,
            only_first_level=args.first_level_only,
            rows_limit=args.rows_limit,
            columns_limit=args.columns_limit,
        )
    except ValidationError as e:
        logger.error(f"잘못된 그리드 설정/옵션: {args.input}\n{e}")
        return 1

    if args.selection:
        selection = tuple(args.selection)
    else:
        # 행 헤더는 시작 행이 -1 인 선택에서만 포함된다
        start_row = -1 if args.row_headers else 0
        selection = (start_row, 0, grid.count_rows() - 1, grid.count_cols() - 1)

    _write_output(selection_to_html(grid, options, selection), args.output)
    return 0


def run_import(args: argparse.Namespace) -> int:
    """HTML 파일들 → 그리드 설정 JSON"""
    _print("\n" + "=" * 60)
    _print("HTML 테이블 가져오기")
    _print("=" * 60)
    _print(f"  입력 파일: {len(args.inputs)}개")

    results = []
    failed = 0

    for path in tqdm(args.inputs, desc="  테이블 파싱", file=sys.stderr):
        try:
            html = path.read_text(encoding="utf-8")
        except OSError as e:
            logger.error(f"파일 읽기 실패: {path} ({e})")
            failed += 1
            continue

        settings = html_to_grid_settings(html)
        if settings is None:
            logger.warning(f"<table> 없음: {path}")
            failed += 1
            continue
        results.append({"file": str(path), "settings": settings.to_settings()})

    _print(f"\n  결과:")
    _print(f"    파싱 성공: {len(results)}개")
    _print(f"    파싱 실패: {failed}개")

    _write_output(json.dumps(results, ensure_ascii=False, indent=2), args.output)
    return 0 if results else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="table-clipboard",
        description="스프레드시트 클립보드용 HTML 테이블 변환",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    export = sub.add_parser("export", help="JSON → HTML 테이블")
    export.add_argument("input", type=Path, help="2D 배열 또는 그리드 설정(camelCase) JSON")
    export.add_argument("-o", "--output", type=Path, help="출력 HTML 경로 (기본: stdout)")
    export.add_argument("--selection", type=int, nargs=4, metavar=("R1", "C1", "R2", "C2"),
                        help="선택 영역 (모서리 순서 무관, 행 -1 = 헤더 행)")
    export.add_argument("--column-headers", action="store_true", help="열 헤더 포함")
    export.add_argument("--row-headers", action="store_true", help="행 헤더 포함")
    export.add_argument("--first-level-only", action="store_true", help="다단 헤더 중 1단만")
    export.add_argument("--rows-limit", type=int, help="최대 행 수")
    export.add_argument("--columns-limit", type=int, help="최대 열 수")
    export.set_defaults(func=run_export)

    imp = sub.add_parser("import", help="HTML 테이블 → 그리드 설정 JSON")
    imp.add_argument("inputs", type=Path, nargs="+", help="HTML 파일")
    imp.add_argument("-o", "--output", type=Path, help="출력 JSON 경로 (기본: stdout)")
    imp.set_defaults(func=run_import)

    return parser


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT, datefmt=LOG_DATEFMT)
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
