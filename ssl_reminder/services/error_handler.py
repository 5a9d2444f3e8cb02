"""
错误定义与错误处理服务
"""
import socket
import ssl
from datetime import datetime, timezone
from typing import Any, Dict, List
import logging


class ConfigurationError(Exception):
    """配置错误（启动时致命）"""


class CertificateInspectionError(Exception):
    """证书检查错误基类"""

    def __init__(self, host: str, message: str):
        super().__init__(message)
        self.host = host


class CertificateConnectionError(CertificateInspectionError):
    """无法完成连接（DNS、拒绝连接、超时、TLS握手失败）"""


class NoCertificateError(CertificateInspectionError):
    """对端未提供证书"""


class MalformedCertificateError(CertificateInspectionError):
    """叶子证书缺失或字段不完整"""


class CheckErrorHandler:
    """检查错误处理器"""

    def __init__(self):
        """初始化检查错误处理器"""
        self.logger = logging.getLogger(__name__)

    def describe(self, host: str, error: Exception) -> Dict[str, Any]:
        """
        生成错误描述

        Args:
            host: 主机
            error: 异常对象

        Returns:
            Dict[str, Any]: 错误信息
        """
        return {
            'host': host,
            'error_type': type(error).__name__,
            'error_message': str(error),
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'suggested_action': self._get_suggested_action(error)
        }

    def _get_suggested_action(self, error: Exception) -> str:
        """
        获取错误的建议处理方案

        Args:
            error: 异常对象

        Returns:
            str: 建议的处理方案
        """
        # 连接错误保留原始异常
        cause = error.__cause__ if isinstance(error, CertificateConnectionError) else error
        message = str(cause).lower()

        if isinstance(error, NoCertificateError):
            return "服务器未提供证书，检查TLS配置"
        elif isinstance(error, MalformedCertificateError):
            return "证书内容不完整，检查证书链配置"
        elif isinstance(cause, socket.timeout):
            return "检查网络连接，考虑增加超时时间"
        elif isinstance(cause, socket.gaierror):
            return "检查主机名是否正确，DNS服务器是否可用"
        elif isinstance(cause, ConnectionRefusedError):
            return "检查目标服务器是否运行，端口是否正确"
        elif isinstance(cause, ssl.SSLError):
            if 'certificate verify failed' in message:
                return "证书验证失败，可能是自签名证书或证书链问题"
            elif 'handshake failure' in message:
                return "TLS握手失败，检查SSL/TLS版本兼容性"
            return "TLS连接问题，检查服务器SSL配置"
        return "检查网络连接和服务器状态"

    def get_error_statistics(self, error_list: List[Dict[str, Any]]) -> Dict[str, Any]:
        """
        获取错误统计信息

        Args:
            error_list: 错误信息列表

        Returns:
            Dict[str, Any]: 错误统计
        """
        error_types = {}
        for error_info in error_list:
            error_type = error_info.get('error_type', 'Unknown')
            error_types[error_type] = error_types.get(error_type, 0) + 1

        most_common = max(error_types.items(), key=lambda x: x[1]) if error_types else None

        return {
            'total_errors': len(error_list),
            'error_types': error_types,
            'most_common_error': most_common[0] if most_common else None,
            'most_common_error_count': most_common[1] if most_common else 0
        }
