import os
from pathlib import Path

STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "fs")  # 'fs' or 's3'
DATA_DIR = os.getenv("DATA_DIR", str(Path(__file__).resolve().parent / "data"))
S3_BUCKET = os.getenv("S3_BUCKET", "stitch-uploads")
S3_ENDPOINT_URL = os.getenv("S3_ENDPOINT_URL", "http://minio:9000")
S3_ACCESS_KEY = os.getenv("S3_ACCESS_KEY", "minioadmin")
S3_SECRET_KEY = os.getenv("S3_SECRET_KEY", "minioadmin")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Rough sewing-industry figure for a standard 6-strand skein.
STITCHES_PER_SKEIN = int(os.getenv("STITCHES_PER_SKEIN", "1500"))
MATCH_STRATEGY = os.getenv("MATCH_STRATEGY", "tolerance")  # 'tolerance' or 'assigned'
MAX_GRID_SIDE = int(os.getenv("MAX_GRID_SIDE", "500"))
MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(5 * 1024 * 1024)))
