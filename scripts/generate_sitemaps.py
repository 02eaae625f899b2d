import argparse
import asyncio
import os
import sys
import time
from pathlib import Path

# Ensure src is in pythonpath
sys.path.append(os.path.join(os.path.dirname(__file__), "..", "src"))

from mw_sitemap_server.api.dependencies import get_sitemap_config, get_title_resolver
from mw_sitemap_server.db import AsyncSessionLocal, PageStore, async_engine
from mw_sitemap_server.sitemap import SitemapGenerator, sitemap_filename
from mw_sitemap_server.sitemap.filenames import INDEX_FILENAME
from mw_sitemap_server.sitemap.timestamps import utc_now_iso8601
from mw_sitemap_server.sitemap.xml_writer import render_index


async def main(output_dir: Path):
    config = get_sitemap_config()
    output_dir.mkdir(parents=True, exist_ok=True)

    print(f"Generating sitemaps for namespaces {list(config.namespaces)}...")

    async with AsyncSessionLocal() as session:
        generator = SitemapGenerator(
            config=config,
            store=PageStore(session),
            resolver=get_title_resolver(),
        )

        # 1. Index, which also tells us which files exist
        start = time.perf_counter()
        refs = await generator.build_index_refs()
        elapsed_ms = (time.perf_counter() - start) * 1000
        index_xml = render_index(refs, elapsed_ms, utc_now_iso8601())
        (output_dir / INDEX_FILENAME).write_text(index_xml, encoding="utf-8")
        print(f"Wrote {INDEX_FILENAME} ({len(refs)} files listed)")

        # 2. One file per index entry
        for ref in refs:
            name = sitemap_filename(ref.namespace_id, ref.part)
            xml = await generator.generate_sitemap_page(ref.namespace_id, ref.part or 1)
            (output_dir / name).write_text(xml, encoding="utf-8")
            print(f"Wrote {name}")

    await async_engine.dispose()
    print("Done!")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Write the wiki sitemaps to a directory.")
    parser.add_argument("output_dir", type=Path, help="Directory to write the XML files to")
    args = parser.parse_args()

    asyncio.run(main(args.output_dir))
