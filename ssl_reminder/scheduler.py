"""
定时调度
"""
import threading
from datetime import timedelta
from typing import Callable, Optional
import logging


DEFAULT_INTERVAL = timedelta(hours=24)


class Scheduler:
    """启动时立即执行一次任务，之后每隔固定时间执行一次"""

    def __init__(self, task: Callable[[], object], interval: timedelta = DEFAULT_INTERVAL,
                 sleep: Optional[Callable[[float], object]] = None):
        """
        初始化调度器

        Args:
            task: 每个周期执行的任务
            interval: 执行间隔
            sleep: 等待函数，默认可被 stop() 中断
        """
        self.task = task
        self.interval = interval
        self.logger = logging.getLogger(__name__)
        self._stop_event = threading.Event()
        self._sleep = sleep or self._stop_event.wait
        self.iterations = 0

    def run(self, max_iterations: Optional[int] = None):
        """
        运行调度循环，直到调用 stop() 或达到 max_iterations

        Args:
            max_iterations: 最大执行次数，None表示不限
        """
        self.logger.info(f"调度器启动，执行间隔: {self.interval}")

        while not self._stop_event.is_set():
            self._run_once()

            if max_iterations is not None and self.iterations >= max_iterations:
                break

            self._sleep(self.interval.total_seconds())

        self.logger.info(f"调度器停止，共执行 {self.iterations} 次")

    def stop(self):
        """停止调度循环"""
        self._stop_event.set()

    def _run_once(self):
        self.iterations += 1
        try:
            self.task()
        except Exception:
            # 单个周期的失败不影响后续周期
            self.logger.exception(f"第 {self.iterations} 次检查失败")
