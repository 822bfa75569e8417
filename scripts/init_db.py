#!/usr/bin/env python3
"""
数据库初始化脚本
创建 doubts 表（--reset 时先删除）
"""
import argparse
import sys
import os
from pathlib import Path

# Add src/backend to path
backend_dir = Path(__file__).parent / ".." / "src" / "backend"
sys.path.insert(0, str(backend_dir))

# Change to backend directory so relative paths work
os.chdir(str(backend_dir))

# Ensure data directory exists
data_dir = Path("data")
data_dir.mkdir(exist_ok=True)

from dotenv import load_dotenv

load_dotenv(Path(__file__).parent / ".." / ".env")

from app.models import init_db, drop_all

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description='初始化答疑箱数据库')
    parser.add_argument(
        '--reset',
        action='store_true',
        help='先删除所有表再重建（仅开发测试用）'
    )
    args = parser.parse_args()

    if args.reset:
        drop_all()
    print("初始化数据库...")
    init_db()
    print("完成！")
