"""
日志服务
"""
import os
import logging
import traceback
from datetime import datetime, timezone
from typing import Dict, Any, Optional

from ..interfaces import LoggerServiceInterface
from .error_handler import CheckErrorHandler


class LoggerService(LoggerServiceInterface):
    """日志服务实现"""

    def __init__(self, logger_name: str = "ssl_reminder", log_level: Optional[str] = None):
        """
        初始化日志服务

        Args:
            logger_name: 日志器名称
            log_level: 日志级别，如果为None则从环境变量读取
        """
        self.logger_name = logger_name
        self.log_level = log_level or os.getenv('LOG_LEVEL', 'INFO')

        self.logger = logging.getLogger(logger_name)
        self._configure_logger()

        self.error_handler = CheckErrorHandler()
        self.reset_stats()

    def _configure_logger(self):
        """配置日志器"""
        level = getattr(logging, self.log_level.upper(), logging.INFO)
        self.logger.setLevel(level)

        # 避免重复添加处理器
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setLevel(level)

            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            handler.setFormatter(formatter)

            self.logger.addHandler(handler)

        # 防止日志传播到根日志器
        self.logger.propagate = False

    def log_check_start(self, host_count: int):
        """
        记录检查开始

        Args:
            host_count: 要检查的主机数量
        """
        self.reset_stats()
        self.execution_stats['start_time'] = datetime.now(timezone.utc)
        self.execution_stats['total_hosts'] = host_count

        self.logger.info(f"检查开始，共 {host_count} 个主机")

    def log_expiration(self, host: str, expiration: datetime):
        """
        记录证书过期时间

        Args:
            host: 主机
            expiration: 过期时间
        """
        self.execution_stats['successful_checks'] += 1
        self.logger.info(f"主机 {host} 的证书过期时间: {expiration.isoformat()}")

    def log_error(self, host: str, error: Exception):
        """
        记录错误信息

        Args:
            host: 主机
            error: 异常对象
        """
        error_info = self.error_handler.describe(host, error)

        self.execution_stats['failed_checks'] += 1
        self.execution_stats['errors'].append(error_info)

        self.logger.error(
            f"获取主机 {host} 的证书过期时间失败: {error_info['error_type']}: "
            f"{error_info['error_message']}（建议: {error_info['suggested_action']}）"
        )

        # 堆栈跟踪（调试级别）
        self.logger.debug(f"主机 {host} 错误堆栈跟踪:\n{traceback.format_exc()}")

    def log_check_end(self):
        """记录检查结束"""
        self.execution_stats['end_time'] = datetime.now(timezone.utc)
        summary = self.get_execution_summary()

        self.logger.info(
            f"检查结束，用时 {summary['duration_seconds']:.2f} 秒: "
            f"总计 {summary['total_hosts']} 个主机, "
            f"成功 {summary['successful_checks']} 个, "
            f"失败 {summary['failed_checks']} 个"
        )

    def log_notification_sent(self, recipients, success: bool):
        """
        记录邮件发送状态

        Args:
            recipients: 收件人列表
            success: 是否发送成功
        """
        if success:
            self.logger.info(f"提醒邮件已发送至 {', '.join(recipients)}")
        else:
            self.logger.error(f"提醒邮件发送失败，收件人: {', '.join(recipients)}")

    def log_configuration_info(self, config: Dict[str, Any]):
        """
        记录配置信息

        Args:
            config: 配置信息字典
        """
        safe_config = self._sanitize_config(config)

        self.logger.info("系统配置信息:")
        for key, value in safe_config.items():
            self.logger.info(f"  {key}: {value}")

    def _sanitize_config(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """
        清理配置信息中的敏感数据

        Args:
            config: 原始配置

        Returns:
            Dict[str, Any]: 清理后的配置
        """
        sensitive_patterns = ('password', 'secret', 'token', 'credential', 'username')

        safe_config = {}
        for key, value in config.items():
            key_lower = key.lower()
            is_sensitive = any(pattern in key_lower for pattern in sensitive_patterns)

            if is_sensitive and isinstance(value, str) and value:
                # 只显示前几个字符
                safe_config[key] = value[:3] + "***" if len(value) > 3 else "***"
            else:
                safe_config[key] = value

        return safe_config

    def get_execution_summary(self) -> Dict[str, Any]:
        """
        获取执行摘要

        Returns:
            Dict[str, Any]: 执行摘要信息
        """
        stats = self.execution_stats
        duration = 0
        if stats['start_time'] and stats['end_time']:
            duration = (stats['end_time'] - stats['start_time']).total_seconds()

        return {
            'start_time': stats['start_time'].isoformat() if stats['start_time'] else None,
            'end_time': stats['end_time'].isoformat() if stats['end_time'] else None,
            'duration_seconds': duration,
            'total_hosts': stats['total_hosts'],
            'successful_checks': stats['successful_checks'],
            'failed_checks': stats['failed_checks'],
            'success_rate': (
                stats['successful_checks'] / stats['total_hosts']
                if stats['total_hosts'] > 0 else 0
            ),
            'errors': stats['errors'],
            'error_statistics': self.error_handler.get_error_statistics(stats['errors'])
        }

    def reset_stats(self):
        """重置执行统计"""
        self.execution_stats = {
            'start_time': None,
            'end_time': None,
            'total_hosts': 0,
            'successful_checks': 0,
            'failed_checks': 0,
            'errors': []
        }
