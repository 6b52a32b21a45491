# File: site_spider/cert.py
"""site_spider.cert: Запись TLS-сертификата поверх ``cryptography.x509``."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Tuple, Union

from cryptography import x509
from cryptography.hazmat.primitives import hashes

__all__ = ("Cert", "CertData")

CertData = Union["Cert", x509.Certificate, bytes, str]


def _name_to_dict(name: x509.Name) -> Dict[str, str]:
    result: Dict[str, str] = {}
    for attr in name:
        value = attr.value
        if isinstance(value, bytes):
            value = value.hex()
        result[attr.rfc4514_attribute_name] = value
    return result


def _alt_names(cert: x509.Certificate) -> Tuple[str, ...]:
    try:
        ext = cert.extensions.get_extension_for_class(x509.SubjectAlternativeName)
    except x509.ExtensionNotFound:
        return ()
    dns = ext.value.get_values_for_type(x509.DNSName)
    ips = [str(ip) for ip in ext.value.get_values_for_type(x509.IPAddress)]
    return tuple(dns) + tuple(ips)


@dataclass(frozen=True, slots=True)
class Cert:
    """Сертификат узла, обнаруженный при обходе."""

    serial: int
    subject: Dict[str, str]
    issuer: Dict[str, str]
    subject_alt_names: Tuple[str, ...]
    not_before: datetime
    not_after: datetime
    fingerprint: str
    certificate: x509.Certificate = field(repr=False, compare=False)

    @classmethod
    def from_x509(cls, cert: x509.Certificate) -> Cert:
        return cls(
            serial=cert.serial_number,
            subject=_name_to_dict(cert.subject),
            issuer=_name_to_dict(cert.issuer),
            subject_alt_names=_alt_names(cert),
            not_before=cert.not_valid_before_utc,
            not_after=cert.not_valid_after_utc,
            fingerprint=cert.fingerprint(hashes.SHA256()).hex(),
            certificate=cert,
        )

    @classmethod
    def load(cls, data: CertData) -> Cert:
        """Принимает Cert, x509.Certificate, DER- или PEM-данные."""
        if isinstance(data, Cert):
            return data
        if isinstance(data, x509.Certificate):
            return cls.from_x509(data)
        if isinstance(data, str):
            data = data.encode("ascii")
        if isinstance(data, (bytes, bytearray)):
            raw = bytes(data)
            if raw.lstrip().startswith(b"-----BEGIN"):
                return cls.from_x509(x509.load_pem_x509_certificate(raw))
            return cls.from_x509(x509.load_der_x509_certificate(raw))
        raise TypeError(f"Неподдерживаемый формат сертификата: {type(data).__name__}")

    def __hash__(self) -> int:
        return hash(self.fingerprint)

    @property
    def common_name(self) -> str | None:
        return self.subject.get("CN")

    def to_dict(self) -> Dict[str, Any]:
        """JSON-совместимое представление для отчётов."""
        return {
            "serial": format(self.serial, "x"),
            "subject": dict(self.subject),
            "issuer": dict(self.issuer),
            "subject_alt_names": list(self.subject_alt_names),
            "not_before": self.not_before.isoformat(),
            "not_after": self.not_after.isoformat(),
            "fingerprint": self.fingerprint,
        }
