"""
Serializer XML per FatturaPA 1.2 con ordinamento deterministico e gestione opzionali
"""

import xml.etree.ElementTree as ET
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional, Tuple, Union

from fatturazione.core.exceptions import ExceptionFactory, PreconditionException
from fatturazione.models.client import Client
from fatturazione.models.fatturapa_enums import (
    CausalePagamento, DOCUMENTI_COLLEGATI, FormatoTrasmissione, IvaRate, Natura
)
from fatturazione.models.invoice import Invoice, PaymentInfo
from fatturazione.models.issuer_profile import IssuerProfile

FATTURAPA_NAMESPACE = "http://ivaservizi.agenziaentrate.gov.it/docs/xsd/fatture/v1.2"
CODICE_DESTINATARIO_DEFAULT = "0000000"
CAUSALE_PAGAMENTO_DEFAULT = CausalePagamento.A.value
ID_PAESE = "IT"
DIVISA = "EUR"
CENT = Decimal("0.01")


class FatturaPASerializer:
    """Serializer XML per FatturaPA con ordinamento deterministico"""

    def generate(self, invoice: Invoice, issuer: Optional[IssuerProfile]) -> str:
        """
        Genera l'XML FatturaPA di una fattura già calcolata.

        Args:
            invoice: Fattura con cliente associato e totali calcolati
            issuer: Profilo emittente configurato

        Returns:
            str: Documento XML con dichiarazione UTF-8

        Raises:
            PreconditionException: Fattura assente o senza cliente associato
            ValidationException: Profilo emittente non configurato
        """
        if invoice is None:
            raise ExceptionFactory.required_argument("invoice")
        if invoice.client is None:
            raise PreconditionException(
                "La fattura deve avere il cliente associato prima della serializzazione",
                {"invoice_id": str(invoice.id)}
            )
        if issuer is None:
            raise ExceptionFactory.issuer_profile_missing()

        client = invoice.client
        formato = FormatoTrasmissione.FPA12 if client.is_public_administration else FormatoTrasmissione.FPR12

        root = ET.Element("p:FatturaElettronica")
        root.set("xmlns:p", FATTURAPA_NAMESPACE)
        root.set("versione", formato.value)

        root.append(self._serialize_header(invoice, issuer, client, formato))
        root.append(self._serialize_body(invoice, client))

        ET.indent(root, space="  ")
        return '<?xml version="1.0" encoding="UTF-8"?>\n' + ET.tostring(root, encoding="unicode")

    # ==================== HEADER ====================

    def _serialize_header(
        self,
        invoice: Invoice,
        issuer: IssuerProfile,
        client: Client,
        formato: FormatoTrasmissione
    ) -> ET.Element:
        """Serializza FatturaElettronicaHeader"""
        header_elem = ET.Element("FatturaElettronicaHeader")
        header_elem.append(self._serialize_dati_trasmissione(invoice, issuer, client, formato))
        header_elem.append(self._serialize_cedente_prestatore(issuer))
        header_elem.append(self._serialize_cessionario_committente(client))
        return header_elem

    def _serialize_dati_trasmissione(
        self,
        invoice: Invoice,
        issuer: IssuerProfile,
        client: Client,
        formato: FormatoTrasmissione
    ) -> ET.Element:
        """Serializza DatiTrasmissione"""
        elem = ET.Element("DatiTrasmissione")

        id_trasmittente = ET.SubElement(elem, "IdTrasmittente")
        self._emit(id_trasmittente, "IdPaese", ID_PAESE)
        self._emit(id_trasmittente, "IdCodice", issuer.partita_iva)

        progressivo = invoice.invoice_number.replace("/", "") if invoice.invoice_number else None
        self._emit(elem, "ProgressivoInvio", progressivo)
        self._emit(elem, "FormatoTrasmissione", formato.value)

        codice_destinatario = self.resolve_codice_destinatario(client)
        self._emit(elem, "CodiceDestinatario", codice_destinatario)

        # PECDestinatario solo con codice di default
        if codice_destinatario == CODICE_DESTINATARIO_DEFAULT:
            self._emit(elem, "PECDestinatario", client.pec)

        return elem

    @staticmethod
    def resolve_codice_destinatario(client: Client) -> str:
        """Codice ufficio PA, poi codice destinatario del cliente, altrimenti 0000000"""
        if client.is_public_administration and client.codice_univoco_ufficio:
            return client.codice_univoco_ufficio
        if client.codice_destinatario:
            return client.codice_destinatario
        return CODICE_DESTINATARIO_DEFAULT

    def _serialize_cedente_prestatore(self, issuer: IssuerProfile) -> ET.Element:
        """Serializza CedentePrestatore"""
        elem = ET.Element("CedentePrestatore")

        dati_anagrafici = ET.SubElement(elem, "DatiAnagrafici")
        id_fiscale = ET.SubElement(dati_anagrafici, "IdFiscaleIVA")
        self._emit(id_fiscale, "IdPaese", ID_PAESE)
        self._emit(id_fiscale, "IdCodice", issuer.partita_iva)
        self._emit(dati_anagrafici, "CodiceFiscale", issuer.codice_fiscale)

        anagrafica = ET.SubElement(dati_anagrafici, "Anagrafica")
        self._emit(anagrafica, "Denominazione", issuer.ragione_sociale)
        self._emit(dati_anagrafici, "RegimeFiscale", issuer.regime_fiscale.value)

        self._serialize_sede(elem, issuer.indirizzo)
        return elem

    def _serialize_cessionario_committente(self, client: Client) -> ET.Element:
        """Serializza CessionarioCommittente"""
        elem = ET.Element("CessionarioCommittente")

        dati_anagrafici = ET.SubElement(elem, "DatiAnagrafici")
        if client.partita_iva:
            id_fiscale = ET.SubElement(dati_anagrafici, "IdFiscaleIVA")
            self._emit(id_fiscale, "IdPaese", ID_PAESE)
            self._emit(id_fiscale, "IdCodice", client.partita_iva)
        self._emit(dati_anagrafici, "CodiceFiscale", client.codice_fiscale)

        anagrafica = ET.SubElement(dati_anagrafici, "Anagrafica")
        self._emit(anagrafica, "Denominazione", client.ragione_sociale)

        self._serialize_sede(elem, client.address)
        return elem

    def _serialize_sede(self, parent: ET.Element, address) -> None:
        sede = ET.SubElement(parent, "Sede")
        self._emit(sede, "Indirizzo", address.street)
        self._emit(sede, "CAP", address.postal_code)
        self._emit(sede, "Comune", address.city)
        self._emit(sede, "Provincia", address.province)
        self._emit(sede, "Nazione", ID_PAESE)

    # ==================== BODY ====================

    def _serialize_body(self, invoice: Invoice, client: Client) -> ET.Element:
        """Serializza FatturaElettronicaBody"""
        elem = ET.Element("FatturaElettronicaBody")
        elem.append(self._serialize_dati_generali(invoice, client))
        elem.append(self._serialize_dati_beni_servizi(invoice))
        if invoice.payment_info:
            elem.append(self._serialize_dati_pagamento(invoice, invoice.payment_info))
        return elem

    def _serialize_dati_generali(self, invoice: Invoice, client: Client) -> ET.Element:
        """Serializza DatiGenerali"""
        elem = ET.Element("DatiGenerali")

        documento = ET.SubElement(elem, "DatiGeneraliDocumento")
        self._emit(documento, "TipoDocumento", invoice.document_type.value)
        self._emit(documento, "Divisa", DIVISA)
        self._emit(documento, "Data", invoice.invoice_date.strftime("%Y-%m-%d"))
        self._emit(documento, "Numero", invoice.invoice_number)

        if client.subject_to_ritenuta and invoice.ritenuta_amount != 0:
            ritenuta = ET.SubElement(documento, "DatiRitenuta")
            self._emit(ritenuta, "TipoRitenuta", client.tipo_ritenuta.value)
            self._emit(ritenuta, "ImportoRitenuta", self._format_decimal(abs(invoice.ritenuta_amount)))
            self._emit(ritenuta, "AliquotaRitenuta", self._format_decimal(client.ritenuta_percentage))
            causale = client.causale_pagamento.value if client.causale_pagamento else CAUSALE_PAGAMENTO_DEFAULT
            self._emit(ritenuta, "CausalePagamento", causale)

        if invoice.bollo_virtuale:
            bollo = ET.SubElement(documento, "DatiBollo")
            self._emit(bollo, "BolloVirtuale", "SI")
            self._emit(bollo, "ImportoBollo", self._format_decimal(invoice.bollo_amount))

        self._emit(documento, "Causale", invoice.causale)

        related_number = (invoice.related_invoice_number or "").strip()
        if invoice.document_type in DOCUMENTI_COLLEGATI and related_number:
            collegate = ET.SubElement(elem, "DatiFattureCollegate")
            self._emit(collegate, "IdDocumento", related_number)

        return elem

    def _serialize_dati_beni_servizi(self, invoice: Invoice) -> ET.Element:
        """Serializza DatiBeniServizi"""
        elem = ET.Element("DatiBeniServizi")

        for numero, item in enumerate(invoice.items, start=1):
            dettaglio = ET.SubElement(elem, "DettaglioLinee")
            self._emit(dettaglio, "NumeroLinea", numero)
            self._emit(dettaglio, "Descrizione", item.description)
            self._emit(dettaglio, "Quantita", self._format_decimal(item.quantity))
            self._emit(dettaglio, "PrezzoUnitario", self._format_decimal(item.unit_price))
            self._emit(dettaglio, "PrezzoTotale", self._format_decimal(item.imponibile))
            self._emit(dettaglio, "AliquotaIVA", self._format_rate(item.iva_rate))
            if item.iva_rate == IvaRate.ZERO and item.natura is not None:
                self._emit(dettaglio, "Natura", item.natura.value)

        for (rate, natura), (imponibile, imposta) in self._group_riepilogo(invoice).items():
            riepilogo = ET.SubElement(elem, "DatiRiepilogo")
            self._emit(riepilogo, "AliquotaIVA", self._format_rate(rate))
            if rate == IvaRate.ZERO and natura is not None:
                self._emit(riepilogo, "Natura", natura.value)
            self._emit(riepilogo, "ImponibileImporto", self._format_decimal(imponibile))
            self._emit(riepilogo, "Imposta", self._format_decimal(imposta))
            self._emit(riepilogo, "EsigibilitaIVA", invoice.esigibilita_iva.value)

        return elem

    @staticmethod
    def _group_riepilogo(invoice: Invoice) -> Dict[Tuple[IvaRate, Optional[Natura]], List[Decimal]]:
        """Somma imponibile e imposta per coppia (aliquota, natura), nell'ordine delle righe"""
        groups: Dict[Tuple[IvaRate, Optional[Natura]], List[Decimal]] = {}
        for item in invoice.items:
            totals = groups.setdefault((item.iva_rate, item.natura), [Decimal("0"), Decimal("0")])
            totals[0] += item.imponibile
            totals[1] += item.iva_amount
        return groups

    def _serialize_dati_pagamento(self, invoice: Invoice, payment_info: PaymentInfo) -> ET.Element:
        """Serializza DatiPagamento"""
        elem = ET.Element("DatiPagamento")
        self._emit(elem, "CondizioniPagamento", self._code_prefix(payment_info.condizioni.value))

        dettaglio = ET.SubElement(elem, "DettaglioPagamento")
        self._emit(dettaglio, "ModalitaPagamento", self._code_prefix(payment_info.modalita.value))
        self._emit(dettaglio, "DataScadenzaPagamento", invoice.due_date.strftime("%Y-%m-%d"))
        self._emit(dettaglio, "ImportoPagamento", self._format_decimal(invoice.total_due))
        if payment_info.iban:
            self._emit(dettaglio, "IBAN", payment_info.iban.replace(" ", "").upper())

        return elem

    # ==================== FORMATTAZIONE ====================

    def _emit(self, parent: ET.Element, tag: str, value: Union[str, int, Decimal, None]) -> None:
        """Emetti tag solo se valore non è None/vuoto"""
        if value is None:
            return
        text = str(value).strip()
        if text:
            elem = ET.SubElement(parent, tag)
            elem.text = text

    @staticmethod
    def _format_decimal(value: Optional[Decimal]) -> Optional[str]:
        """Due decimali, separatore punto, indipendente dal locale"""
        if value is None:
            return None
        quantized = Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)
        if quantized == 0:
            quantized = Decimal("0.00")
        return f"{quantized:f}"

    def _format_rate(self, rate: IvaRate) -> str:
        return self._format_decimal(Decimal(rate.value))

    @staticmethod
    def _code_prefix(compound: str) -> str:
        """MP05_Bonifico -> MP05"""
        return compound.split("_", 1)[0]
