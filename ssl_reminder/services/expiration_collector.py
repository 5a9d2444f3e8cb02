"""
证书过期时间收集服务
"""
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from datetime import datetime
from typing import Dict, Iterable, Optional

from ..interfaces import CertificateInspectorInterface
from .logger import LoggerService


class ExpirationCollector:
    """对所有主机执行证书检查，汇总过期时间"""

    def __init__(self, inspector: CertificateInspectorInterface,
                 logger_service: Optional[LoggerService] = None, max_workers: int = 1):
        """
        初始化收集器

        Args:
            inspector: 证书检查器
            logger_service: 日志服务
            max_workers: 并发检查数，1表示顺序检查
        """
        self.inspector = inspector
        self.logger_service = logger_service or LoggerService()
        self.max_workers = max(1, max_workers)

    def collect(self, hosts: Iterable[str]) -> Dict[str, datetime]:
        """
        获取主机到过期时间的映射，失败的主机不会出现在结果中

        Args:
            hosts: 主机列表

        Returns:
            Dict[str, datetime]: 主机 -> 过期时间
        """
        hosts = list(hosts)
        expirations = {}

        if self.max_workers > 1 and len(hosts) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                futures = [(host, executor.submit(self.inspector.inspect, host)) for host in hosts]
                # 结果只在当前线程中合并
                for host, future in futures:
                    self._record(expirations, host, future.result)
        else:
            for host in hosts:
                self._record(expirations, host, partial(self.inspector.inspect, host))

        return expirations

    def _record(self, expirations: Dict[str, datetime], host: str, fetch):
        try:
            expiration = fetch()
        except Exception as e:
            self.logger_service.log_error(host, e)
            return

        self.logger_service.log_expiration(host, expiration)
        expirations[host] = expiration
