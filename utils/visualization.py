"""
시각화 모듈: Gantt Chart 및 통계 그래프 생성
"""

import matplotlib.pyplot as plt
import matplotlib.patches as mpatches
from typing import List, Dict
from core.engine import GanttEntry


class Visualizer:
    """스케줄링 결과 시각화"""

    def __init__(self):
        # 프로세스별 색상 설정
        self.colors = plt.cm.Set3.colors
        self.idle_color = '#CCCCCC'

    def draw_gantt_chart(self, gantt_data: List[GanttEntry], algorithm_name: str,
                         save_path: str = None, show: bool = True):
        """
        Gantt Chart 그리기

        Args:
            gantt_data: Gantt Chart 데이터
            algorithm_name: 알고리즘 이름
            save_path: 저장 경로 (None이면 저장 안 함)
            show: 화면에 표시할지 여부
        """
        if not gantt_data:
            print(f"{algorithm_name}에 대한 Gantt 차트 데이터가 없습니다")
            return

        fig, ax = plt.subplots(figsize=(16, 6))

        # 프로세스 ID 추출 (처음 등장한 순서)
        unique_pids = []
        for entry in gantt_data:
            if entry.pid is not None and entry.pid not in unique_pids:
                unique_pids.append(entry.pid)
        pid_to_y = {pid: idx for idx, pid in enumerate(unique_pids)}

        for entry in gantt_data:
            duration = entry.end_time - entry.start_time

            if entry.pid is None:
                # CPU 유휴 시간
                ax.axvspan(entry.start_time, entry.end_time, color=self.idle_color, alpha=0.3)
                continue

            y_pos = pid_to_y[entry.pid]
            color = self.colors[y_pos % len(self.colors)]

            ax.barh(y_pos, duration, left=entry.start_time, height=0.8,
                    color=color, edgecolor='black', linewidth=0.5)

            # 충분히 긴 경우만 텍스트 표시
            if duration > 1:
                ax.text(entry.start_time + duration/2, y_pos, entry.pid,
                        ha='center', va='center', fontsize=8, fontweight='bold')

        ax.set_yticks(range(len(unique_pids)))
        ax.set_yticklabels(unique_pids)
        ax.set_xlabel('Time', fontsize=12)
        ax.set_ylabel('Process', fontsize=12)
        ax.set_title(f'Gantt Chart - {algorithm_name}', fontsize=14, fontweight='bold')
        ax.grid(axis='x', alpha=0.3)

        legend_elements = [
            mpatches.Patch(color=self.colors[0], label='Running'),
            mpatches.Patch(color=self.idle_color, alpha=0.3, label='Idle')
        ]
        ax.legend(handles=legend_elements, loc='upper right')

        plt.tight_layout()

        if save_path:
            plt.savefig(save_path, dpi=150, bbox_inches='tight')
            print(f"Gantt 차트가 {save_path}에 저장되었습니다")

        if show:
            plt.show()
        else:
            plt.close(fig)

    def compare_algorithms(self, results: List[Dict], save_path: str = None, show: bool = True):
        """
        여러 정책의 성능 비교 그래프

        Args:
            results: 각 정책의 결과 리스트
            save_path: 저장 경로
            show: 화면에 표시할지 여부
        """
        if not results:
            print("비교할 결과가 없습니다")
            return

        algorithms = [r['algorithm'] for r in results]
        panels = [
            ('avg_waiting_time', 'Average Waiting Time', 'skyblue', '{:.2f}'),
            ('avg_turnaround_time', 'Average Turnaround Time', 'lightcoral', '{:.2f}'),
            ('avg_response_time', 'Average Response Time', 'plum', '{:.2f}'),
            ('cpu_utilization', 'CPU Utilization (%)', 'lightgreen', '{:.1f}%'),
        ]

        fig, axes = plt.subplots(2, 2, figsize=(16, 12))
        fig.suptitle('Scheduling Policies Performance Comparison',
                     fontsize=16, fontweight='bold')

        for ax, (key, title, color, fmt) in zip(axes.flat, panels):
            values = [r['statistics'][key] for r in results]
            bars = ax.bar(range(len(algorithms)), values, color=color, edgecolor='black')
            ax.set_xticks(range(len(algorithms)))
            ax.set_xticklabels(algorithms, rotation=45, ha='right', fontsize=9)
            ax.set_ylabel(title, fontsize=11)
            ax.set_title(f'{title} Comparison', fontsize=12, fontweight='bold')
            ax.grid(axis='y', alpha=0.3)
            if key == 'cpu_utilization':
                ax.set_ylim(0, 100)

            # 값 표시
            for bar, value in zip(bars, values):
                ax.text(bar.get_x() + bar.get_width()/2., bar.get_height(),
                        fmt.format(value), ha='center', va='bottom', fontsize=9)

        plt.tight_layout()

        if save_path:
            plt.savefig(save_path, dpi=150, bbox_inches='tight')
            print(f"비교 차트가 {save_path}에 저장되었습니다")

        if show:
            plt.show()
        else:
            plt.close(fig)

    def print_statistics_table(self, results: List[Dict]):
        """
        통계를 표 형식으로 출력

        Args:
            results: 각 정책의 결과 리스트
        """
        print("\n" + "="*110)
        print("스케줄링 정책 성능 비교")
        print("="*110)
        print(f"{'정책':<40} {'평균 대기':>12} {'평균 반환':>12} {'평균 응답':>12} "
              f"{'CPU 이용률(%)':>15} {'완료':>8}")
        print("-"*110)

        for result in results:
            stats = result['statistics']
            print(f"{result['algorithm']:<40} "
                  f"{stats['avg_waiting_time']:>12.2f} "
                  f"{stats['avg_turnaround_time']:>12.2f} "
                  f"{stats['avg_response_time']:>12.2f} "
                  f"{stats['cpu_utilization']:>15.2f} "
                  f"{stats['completed']:>4}/{stats['total']:<3}")

        print("="*110 + "\n")

    def print_process_details(self, results: Dict):
        """개별 프로세스의 상세 정보 출력"""
        print(f"\n{'='*80}")
        print(f"프로세스 상세 - {results['algorithm']}")
        print(f"{'='*80}")
        print(f"{'ID':<6} {'도착':>8} {'버스트':>8} {'우선순위':>10} {'시작':>8} {'완료':>8} "
              f"{'대기':>8} {'반환':>8}")
        print(f"{'-'*80}")

        for p in results['processes']:
            start = p.start_time if p.start_time is not None else '-'
            completion = p.completion_time if p.completion_time is not None else '-'
            waiting = p.waiting_time if p.waiting_time is not None else '-'
            turnaround = p.turnaround_time if p.turnaround_time is not None else '-'
            print(f"{p.pid:<6} "
                  f"{p.arrival_time:>8} "
                  f"{p.burst_time:>8} "
                  f"{p.priority:>10} "
                  f"{start:>8} "
                  f"{completion:>8} "
                  f"{waiting:>8} "
                  f"{turnaround:>8}")

        print(f"{'='*80}\n")
