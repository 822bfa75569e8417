#!/usr/bin/env python3
"""
答疑箱命令行客户端

示例：
    python scripts/doubt_cli.py submit -s Physics -c phy101 -t "Dr. Lee" -q "Why is the sky blue exactly?"
    python scripts/doubt_cli.py list --subject Physics --status pending
    python scripts/doubt_cli.py latest
    python scripts/doubt_cli.py dashboard -u teacher -p teacher123 -n "Dr. Lee"
    python scripts/doubt_cli.py answer <id> -a "The sky is blue due to Rayleigh scattering of sunlight."
    python scripts/doubt_cli.py stats
"""
import argparse
import sys
from pathlib import Path

# 添加项目路径
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root / ".." / "src" / "backend"))

from dotenv import load_dotenv

load_dotenv(project_root / ".." / ".env")

from app.client import DoubtBoxClient, DoubtBoxClientError, DoubtView, TeacherSession, SessionExpiredError
from app.core.exceptions import AuthError


def _format_time(doubt: DoubtView) -> str:
    if doubt.created_at is None:
        return "Recently"
    return doubt.created_at.strftime("%B %d, %Y %H:%M")


def print_doubt(doubt: DoubtView) -> None:
    """打印单条问题"""
    print(f"[{doubt.status.upper()}] {doubt.subject} ({doubt.course_code or 'N/A'}) - {doubt.teacher or 'N/A'}")
    print(f"  id: {doubt.id}")
    print(f"  时间: {_format_time(doubt)}")
    print(f"  问题: {doubt.question}")
    if doubt.answer:
        print(f"  回答: {doubt.answer}")
    else:
        print("  ⏳ 等待教师回答...")
    print()


def print_doubts(doubts) -> None:
    if not doubts:
        print("暂无问题")
        return
    for doubt in doubts:
        print_doubt(doubt)
    print(f"共 {len(doubts)} 条")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='WhisperBoard 匿名答疑箱客户端')
    parser.add_argument('--api-url', type=str, default=None, help='API 地址（默认: WHISPERBOARD_API_URL）')
    sub = parser.add_subparsers(dest='command', required=True)

    p = sub.add_parser('submit', help='提交问题')
    p.add_argument('-s', '--subject', required=True)
    p.add_argument('-c', '--course-code', required=True)
    p.add_argument('-t', '--teacher', required=True)
    p.add_argument('-q', '--question', required=True)

    p = sub.add_parser('list', help='学生视图：问题列表')
    p.add_argument('--subject', default='all', help='按学科筛选（默认: all）')
    p.add_argument('--status', default='all', help='pending / answered / all')

    sub.add_parser('latest', help='最新的一条问题')

    p = sub.add_parser('show', help='查看单个问题')
    p.add_argument('doubt_id')

    p = sub.add_parser('answer', help='回答问题')
    p.add_argument('doubt_id')
    p.add_argument('-a', '--answer', required=True)

    sub.add_parser('stats', help='统计')

    p = sub.add_parser('login', help='服务端演示登录')
    p.add_argument('-u', '--username', required=True)
    p.add_argument('-p', '--password', required=True)

    p = sub.add_parser('dashboard', help='教师面板：当前教师的问题')
    p.add_argument('-u', '--username', required=True)
    p.add_argument('-p', '--password', required=True)
    p.add_argument('-n', '--teacher-name', required=True, help='问题中的教师姓名')

    return parser


def run(args: argparse.Namespace) -> int:
    client = DoubtBoxClient(args.api_url)

    if args.command == 'submit':
        doubt = client.submit_doubt(args.subject, args.course_code, args.teacher, args.question)
        print("✅ 问题已提交")
        print_doubt(doubt)
    elif args.command == 'list':
        print_doubts(client.load_student_doubts(subject=args.subject, status=args.status))
    elif args.command == 'latest':
        doubt = client.latest_doubt()
        if doubt:
            print_doubt(doubt)
        else:
            print("暂无问题")
    elif args.command == 'show':
        print_doubt(client.get_doubt(args.doubt_id))
    elif args.command == 'answer':
        doubt = client.submit_answer(args.doubt_id, args.answer)
        print("✅ 回答已提交")
        print_doubt(doubt)
    elif args.command == 'stats':
        stats = client.get_stats()
        print(f"总数: {stats['total']}  待回答: {stats['pending']}  已回答: {stats['answered']}")
    elif args.command == 'login':
        data = client.login(args.username, args.password)
        print(f"✅ 登录成功: {data.get('username')} ({data.get('role')}) token={data.get('token')}")
    elif args.command == 'dashboard':
        session = TeacherSession()
        session.login(args.username, args.password, args.teacher_name)
        print(f"教师: {session.teacher_name}\n")
        print_doubts(client.load_teacher_doubts(session))
    return 0


def main() -> int:
    args = build_parser().parse_args()
    try:
        return run(args)
    except DoubtBoxClientError as e:
        print(f"❌ {e}")
        for detail in e.details:
            print(f"   - {detail}")
        return 1
    except (AuthError, SessionExpiredError) as e:
        print(f"❌ {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
