"""
证书检查服务
"""
import ssl
import socket
from datetime import datetime, timezone
import logging

from ..interfaces import CertificateInspectorInterface
from .error_handler import (
    CertificateConnectionError,
    MalformedCertificateError,
    NoCertificateError,
)


class CertificateInspector(CertificateInspectorInterface):
    """通过TLS握手获取叶子证书过期时间"""

    def __init__(self, timeout: int = 10, port: int = 443):
        """
        初始化证书检查器

        Args:
            timeout: 连接及握手超时时间（秒）
            port: TLS端口，默认443
        """
        self.timeout = timeout
        self.port = port
        self.logger = logging.getLogger(__name__)

    def inspect(self, host: str) -> datetime:
        """
        获取主机叶子证书的过期时间

        Args:
            host: 要检查的主机

        Returns:
            datetime: 证书过期时间（UTC）

        Raises:
            CertificateConnectionError: 无法完成连接或握手
            NoCertificateError: 对端未提供证书
            MalformedCertificateError: 证书中没有有效的过期时间
        """
        clean_host = self._clean_host(host)
        self.logger.debug(f"连接 {clean_host}:{self.port}，超时 {self.timeout} 秒")
        cert = self._get_peer_certificate(clean_host)

        if not cert:
            raise NoCertificateError(clean_host, f"主机 {clean_host} 未提供证书")

        return self._parse_expiry_date(clean_host, cert)

    def _clean_host(self, host: str) -> str:
        """
        清理主机格式

        Args:
            host: 原始主机

        Returns:
            str: 清理后的主机
        """
        host = host.strip()

        # 移除协议前缀
        if host.startswith('https://'):
            host = host[8:]

        # 移除路径部分
        if '/' in host:
            host = host.split('/')[0]

        return host.lower()

    def _get_peer_certificate(self, host: str) -> dict:
        """
        完成TLS握手并读取对端证书，握手后立即关闭连接

        Args:
            host: 主机

        Returns:
            dict: 叶子证书信息，对端未提供证书时为空

        Raises:
            CertificateConnectionError: 连接失败或握手失败
        """
        context = ssl.create_default_context()

        try:
            with socket.create_connection((host, self.port), timeout=self.timeout) as sock:
                with context.wrap_socket(sock, server_hostname=host) as ssock:
                    cert = ssock.getpeercert()
        except (OSError, ValueError) as e:
            # ssl.SSLError、socket.timeout、socket.gaierror 均为 OSError 子类
            raise CertificateConnectionError(
                host, f"连接 {host}:{self.port} 失败: {type(e).__name__}: {e}"
            ) from e

        return cert or {}

    def _parse_expiry_date(self, host: str, cert: dict) -> datetime:
        """
        解析证书过期时间

        Args:
            host: 主机
            cert: 叶子证书信息

        Returns:
            datetime: 过期时间
        """
        not_after = cert.get('notAfter')
        if not not_after:
            raise MalformedCertificateError(host, f"主机 {host} 的证书中未找到过期时间信息")

        # 时间格式：'Dec 31 23:59:59 2024 GMT'
        try:
            expiry_date = datetime.strptime(not_after, '%b %d %H:%M:%S %Y %Z')
        except ValueError as e:
            raise MalformedCertificateError(
                host, f"主机 {host} 的证书过期时间无法解析: {not_after}"
            ) from e

        return expiry_date.replace(tzinfo=timezone.utc)
