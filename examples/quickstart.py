import sys
from pathlib import Path

from phashtree import SimilarityIndex

idx = SimilarityIndex(preset="default")

for p in sorted(Path(sys.argv[1] if len(sys.argv) > 1 else "./photos").glob("*.jpg")):
    fp = idx.compute_and_store(p, "phash")
    print(f"{fp:016x}", p.name)

query = sys.argv[2] if len(sys.argv) > 2 else "./query.jpg"
for name in idx.find_similar_by_image(query, "phash", max_distance=8):
    print("match:", name)
