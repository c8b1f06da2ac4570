"""SQLAlchemy ORM models for the tenant configuration tables"""

import uuid
from sqlalchemy import Column, Boolean, DateTime, Integer, ForeignKey, Text, JSON, Uuid
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


class TenantRecord(Base):
    """Tenant (association) with ERP and chat credentials"""

    __tablename__ = "clientes"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    nome = Column(Text, nullable=False)
    ativo = Column(Boolean, nullable=False, default=True)
    token_erp = Column(Text, nullable=False)
    token_chat = Column(Text, nullable=False)
    token_canal = Column(Text, nullable=False)
    perfil_sistema = Column(Text, nullable=False, default="SGA")
    base_url = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    boleto_settings = relationship("BoletoSettingsRecord", uselist=False, back_populates="tenant", cascade="all, delete-orphan")
    response_settings = relationship("ResponseSettingsRecord", uselist=False, back_populates="tenant", cascade="all, delete-orphan")
    inspection_settings = relationship("InspectionSettingsRecord", uselist=False, back_populates="tenant", cascade="all, delete-orphan")


class BoletoSettingsRecord(Base):
    """Due-date window and situation policy"""

    __tablename__ = "configuracoes_boleto"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    cliente_id = Column(Uuid(as_uuid=True), ForeignKey("clientes.id", ondelete="CASCADE"), nullable=False, unique=True)
    dias_antes_vencimento = Column(Integer, nullable=False, default=0)
    dias_depois_vencimento = Column(Integer, nullable=False, default=0)
    situacoes_envio_direto = Column(JSON, nullable=True)
    situacoes_com_checagem_vencimento = Column(JSON, nullable=True)
    dias_checagem_vencimento = Column(Integer, nullable=True)

    tenant = relationship("TenantRecord", back_populates="boleto_settings")


class ResponseSettingsRecord(Base):
    """Customer-facing message templates"""

    __tablename__ = "configuracoes_respostas"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    cliente_id = Column(Uuid(as_uuid=True), ForeignKey("clientes.id", ondelete="CASCADE"), nullable=False, unique=True)
    response_sucesso = Column(Text, nullable=False)
    response_regularizacao_moto = Column(Text, nullable=False)
    response_regularizacao_veiculo = Column(Text, nullable=False)
    response_boleto_baixado = Column(Text, nullable=False)

    tenant = relationship("TenantRecord", back_populates="response_settings")


class InspectionSettingsRecord(Base):
    """Inspection (revistoria) video settings"""

    __tablename__ = "configuracoes_revistoria"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    cliente_id = Column(Uuid(as_uuid=True), ForeignKey("clientes.id", ondelete="CASCADE"), nullable=False, unique=True)
    enviar_midia = Column(Boolean, nullable=True, default=False)
    video_moto = Column(Text, nullable=True)
    video_carro = Column(Text, nullable=True)

    tenant = relationship("TenantRecord", back_populates="inspection_settings")
