#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
틱 기반 CPU 스케줄러 시뮬레이터 - 메인 실행 파일
정책 선택 기능 포함
"""

import os
import re
import sys

from core.config import DEFAULT_TIME_QUANTUM, SAMPLE_PROCESSES
from core.driver import SimulationDriver
from core.errors import SimulationError
from core.process import ProcessSpec
from schedulers.policies import POLICY_INFO, PolicyKind
from utils.input_parser import InputParser
from utils.visualization import Visualizer


# 메뉴 번호 -> 정책
POLICIES = {
    '1': PolicyKind.FCFS,
    '2': PolicyKind.SJF,
    '3': PolicyKind.PRIORITY,
    '4': PolicyKind.ROUND_ROBIN,
    '5': PolicyKind.ROUND_ROBIN_QUANTUM,
}


def print_banner():
    """배너 출력"""
    print("\n" + "="*80)
    print(" "*25 + "CPU 스케줄러 시뮬레이터")
    print("="*80 + "\n")


def print_policy_menu():
    """정책 선택 메뉴 출력"""
    print("\n" + "="*80)
    print("스케줄링 정책 선택")
    print("="*80)
    for key, policy in POLICIES.items():
        print(f"  {key}. {POLICY_INFO[policy]['name']}")
    print("  all. 모든 정책 실행")
    print("  0. 종료")
    print("="*80)


def get_user_choice():
    """사용자 선택 입력"""
    while True:
        choice = input("\n선택하세요: ").strip()

        if choice == '0':
            print("\n프로그램을 종료합니다...")
            sys.exit(0)

        if choice in POLICIES or choice == 'all':
            return choice

        print("[오류] 잘못된 선택입니다. 다시 시도하세요.")


def run_single_policy(policy, specs, verbose=True, time_quantum=DEFAULT_TIME_QUANTUM):
    """단일 정책으로 완료될 때까지 실행"""
    driver = SimulationDriver(specs, policy, time_quantum=time_quantum)
    driver.start()
    while driver.is_running:
        driver.step()

    if verbose:
        for log in driver.event_log:
            print(log)

    return driver.get_results()


def run_all_policies(specs, verbose=False, time_quantum=DEFAULT_TIME_QUANTUM):
    """모든 정책 실행"""
    results = []
    total = len(POLICIES)

    for key, policy in POLICIES.items():
        print(f"[{key}/{total}] {POLICY_INFO[policy]['name']} 실행 중...")
        results.append(run_single_policy(policy, specs, verbose, time_quantum))

    return results


def safe_filename(name):
    """정책 이름을 파일명으로 변환"""
    safe = re.sub(r'[^A-Za-z0-9]+', '_', name)
    return safe.strip('_')


def save_results(results, output_dir="simulation_results"):
    """결과 저장 (Gantt 차트, 비교 차트, 텍스트)"""
    os.makedirs(output_dir, exist_ok=True)

    visualizer = Visualizer()
    visualizer.print_statistics_table(results)

    print("Gantt 차트 생성 중...")
    for result in results:
        save_path = os.path.join(output_dir, f"gantt_{safe_filename(result['algorithm'])}.png")
        visualizer.draw_gantt_chart(result['gantt_chart'], result['algorithm'],
                                    save_path=save_path, show=False)

    if len(results) > 1:
        comparison_path = os.path.join(output_dir, "comparison.png")
        visualizer.compare_algorithms(results, save_path=comparison_path, show=False)

    save_results_to_file(results, os.path.join(output_dir, "results.txt"))
    print(f"\n결과가 '{output_dir}/' 디렉토리에 저장되었습니다\n")


def save_results_to_file(results, filename):
    """결과를 텍스트 파일로 저장"""
    with open(filename, 'w', encoding='utf-8') as f:
        f.write("="*100 + "\n")
        f.write("CPU 스케줄러 시뮬레이션 결과\n")
        f.write("="*100 + "\n\n")

        f.write(f"{'정책':<40} {'평균 대기':>12} {'평균 반환':>12} {'평균 응답':>12} "
                f"{'CPU 이용률(%)':>15}\n")
        f.write("-"*100 + "\n")
        for result in results:
            stats = result['statistics']
            f.write(f"{result['algorithm']:<40} "
                    f"{stats['avg_waiting_time']:>12.2f} "
                    f"{stats['avg_turnaround_time']:>12.2f} "
                    f"{stats['avg_response_time']:>12.2f} "
                    f"{stats['cpu_utilization']:>15.2f}\n")

        for result in results:
            f.write("\n" + "="*100 + "\n")
            f.write(f"정책: {result['algorithm']}\n")
            f.write("-"*100 + "\n")
            f.write(f"{'ID':<6} {'도착':>6} {'버스트':>6} {'우선순위':>8} {'완료':>6} "
                    f"{'반환':>6} {'대기':>6}\n")
            for p in result['processes']:
                # 시간 제한으로 중단된 경우 미완료 프로세스는 '-'
                completion = p.completion_time if p.completion_time is not None else '-'
                turnaround = p.turnaround_time if p.turnaround_time is not None else '-'
                waiting = p.waiting_time if p.waiting_time is not None else '-'
                f.write(f"{p.pid:<6} {p.arrival_time:>6} {p.burst_time:>6} {p.priority:>8} "
                        f"{completion:>6} {turnaround:>6} {waiting:>6}\n")

            f.write("\n이벤트 로그:\n")
            for log in result['event_log']:
                f.write(log + "\n")

    print(f"[완료] 결과가 {filename}에 저장되었습니다")


def select_input():
    """입력 데이터 선택"""
    print("\n[입력 옵션]")
    print("  0. 기본 샘플 (P1~P4)")
    print("  1. 랜덤 데이터 (자동 생성)")
    print("  2. CSV 파일 경로 입력")

    while True:
        choice = input("\n입력 옵션 선택 (0-2): ").strip()

        if choice == '0':
            return [ProcessSpec(**p) for p in SAMPLE_PROCESSES]
        elif choice == '1':
            return InputParser.generate_random_specs()
        elif choice == '2':
            path = input("파일 경로: ").strip()
            try:
                return InputParser.parse_file(path)
            except FileNotFoundError:
                print(f"[오류] 파일 '{path}'을 찾을 수 없습니다")
            except SimulationError as e:
                print(f"[오류] 입력 검증 실패: {e}")
        else:
            print("[오류] 0, 1, 또는 2를 입력하세요.")


def main():
    """메인 함수"""
    print_banner()

    specs = select_input()
    InputParser.print_process_summary(specs)

    while True:
        print_policy_menu()
        choice = get_user_choice()

        if choice == 'all':
            results = run_all_policies(specs)
        else:
            results = [run_single_policy(POLICIES[choice], specs)]
        save_results(results)

        continue_choice = input("다른 시뮬레이션을 실행하시겠습니까? (y/n): ").strip().lower()
        if continue_choice != 'y':
            print("\n시뮬레이터를 사용해 주셔서 감사합니다!")
            break


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("\n\n사용자에 의해 시뮬레이션이 중단되었습니다.")
        sys.exit(0)
