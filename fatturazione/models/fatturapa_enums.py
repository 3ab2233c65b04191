"""
Enums per FatturaPA e per il dominio di fatturazione - Domini validi secondo specifiche tecniche
"""

from enum import Enum


class RegimeFiscale(str, Enum):
    """Regime Fiscale - RFxx"""
    RF01 = "RF01"  # Ordinario
    RF02 = "RF02"  # Contribuenti minimi
    RF04 = "RF04"  # Agricoltura e attività connesse e pesca
    RF05 = "RF05"  # Vendita sali e tabacchi
    RF06 = "RF06"  # Commercio fiammiferi
    RF07 = "RF07"  # Editoria
    RF08 = "RF08"  # Gestione servizi telefonia pubblica
    RF09 = "RF09"  # Rivendita documenti di trasporto pubblico
    RF10 = "RF10"  # Intrattenimenti, giochi e altre attività
    RF11 = "RF11"  # Agenzie viaggi e turismo
    RF12 = "RF12"  # Agriturismo
    RF13 = "RF13"  # Vendite a domicilio
    RF14 = "RF14"  # Rivendita beni usati, oggetti d'arte
    RF15 = "RF15"  # Agenzie di vendite all'asta
    RF16 = "RF16"  # IVA per cassa P.A.
    RF17 = "RF17"  # IVA per cassa
    RF18 = "RF18"  # Altro
    RF19 = "RF19"  # Regime forfettario


class TipoDocumento(str, Enum):
    """Tipo Documento - TDxx"""
    TD01 = "TD01"  # Fattura immediata
    TD02 = "TD02"  # Acconto/Anticipo su fattura
    TD04 = "TD04"  # Nota di credito
    TD05 = "TD05"  # Nota di debito
    TD06 = "TD06"  # Parcella
    TD07 = "TD07"  # Fattura semplificata
    TD08 = "TD08"  # Nota di credito semplificata
    TD09 = "TD09"  # Nota di debito semplificata
    TD24 = "TD24"  # Fattura differita art.21, comma 4, lett. a)


DOCUMENTI_COLLEGATI = frozenset({
    TipoDocumento.TD04,
    TipoDocumento.TD05,
    TipoDocumento.TD08,
    TipoDocumento.TD09,
})


class InvoiceStatus(str, Enum):
    """Stato del ciclo di vita della fattura"""
    DRAFT = "Draft"
    ISSUED = "Issued"
    SENT = "Sent"
    PAID = "Paid"
    OVERDUE = "Overdue"
    CANCELLED = "Cancelled"


class IvaRate(int, Enum):
    """Aliquote IVA vigenti"""
    STANDARD = 22
    REDUCED = 10
    INTERMEDIATE = 5
    SUPER_REDUCED = 4
    ZERO = 0


class Natura(str, Enum):
    """Natura - Nxx"""
    N1 = "N1"      # Escluse ex art. 15
    N2_1 = "N2.1"  # Non soggette - artt. da 7 a 7-septies del DPR 633/72
    N2_2 = "N2.2"  # Non soggette - altri casi
    N3_1 = "N3.1"  # Non imponibili - esportazioni
    N3_2 = "N3.2"  # Non imponibili - cessioni intracomunitarie
    N3_3 = "N3.3"  # Non imponibili - cessioni verso San Marino
    N3_4 = "N3.4"  # Non imponibili - operazioni assimilate alle cessioni all'esportazione
    N3_5 = "N3.5"  # Non imponibili - a seguito di dichiarazioni d'intento
    N3_6 = "N3.6"  # Non imponibili - altre operazioni
    N4 = "N4"      # Esenti
    N5 = "N5"      # Regime del margine / IVA non esposta in fattura
    N6_1 = "N6.1"  # Inversione contabile - cessione di rottami e altri materiali di recupero
    N6_2 = "N6.2"  # Inversione contabile - cessione di oro e argento
    N6_3 = "N6.3"  # Inversione contabile - subappalto nel settore edile
    N6_4 = "N6.4"  # Inversione contabile - cessione di fabbricati
    N6_5 = "N6.5"  # Inversione contabile - cessione di telefoni cellulari
    N6_6 = "N6.6"  # Inversione contabile - cessione di prodotti elettronici
    N6_7 = "N6.7"  # Inversione contabile - prestazioni comparto edile
    N6_8 = "N6.8"  # Inversione contabile - operazioni settore energetico
    N6_9 = "N6.9"  # Inversione contabile - altri casi
    N7 = "N7"      # IVA assolta in altro stato UE

    @property
    def is_reverse_charge(self) -> bool:
        return self.value.startswith("N6")


class ClientType(str, Enum):
    """Tipologia cliente"""
    PROFESSIONAL = "Professional"
    COMPANY = "Company"
    PUBLIC_ADMINISTRATION = "PublicAdministration"


class TipoRitenuta(str, Enum):
    """Tipo Ritenuta - RTxx"""
    RT01 = "RT01"  # Ritenuta persone fisiche
    RT02 = "RT02"  # Ritenuta persone giuridiche


class CausalePagamento(str, Enum):
    """Causale pagamento ritenuta (modello CU)"""
    A = "A"    # Prestazioni di lavoro autonomo abituale
    B = "B"
    C = "C"
    D = "D"
    E = "E"
    G = "G"
    H = "H"
    I = "I"
    L = "L"
    M = "M"
    N = "N"
    O = "O"
    P = "P"
    Q = "Q"    # Agente monomandatario
    R = "R"    # Agente plurimandatario
    S = "S"
    T = "T"
    U = "U"
    V = "V"
    W = "W"
    X = "X"
    Y = "Y"
    Z = "Z"
    ZO = "ZO"


class FormatoTrasmissione(str, Enum):
    """Formato Trasmissione"""
    FPR12 = "FPR12"  # Fattura verso privati
    FPA12 = "FPA12"  # Fattura verso PA


class CondizioniPagamento(str, Enum):
    """Condizioni Pagamento - il codice TPxx è il prefisso del nome"""
    TP01_RATE = "TP01_Rate"            # Pagamento a rate
    TP02_COMPLETO = "TP02_Completo"    # Pagamento completo
    TP03_ANTICIPO = "TP03_Anticipo"    # Anticipo


class ModalitaPagamento(str, Enum):
    """Modalità Pagamento - il codice MPxx è il prefisso del nome"""
    MP01_CONTANTI = "MP01_Contanti"
    MP02_ASSEGNO = "MP02_Assegno"
    MP03_ASSEGNO_CIRCOLARE = "MP03_AssegnoCircolare"
    MP04_CONTANTI_TESORERIA = "MP04_ContantiTesoreria"
    MP05_BONIFICO = "MP05_Bonifico"
    MP06_VAGLIA_CAMBIARIO = "MP06_VagliaCambiario"
    MP07_BOLLETTINO_BANCARIO = "MP07_BollettinoBancario"
    MP08_CARTA_PAGAMENTO = "MP08_CartaPagamento"
    MP09_RID = "MP09_RID"
    MP10_RID_UTENZE = "MP10_RIDUtenze"
    MP11_RID_VELOCE = "MP11_RIDVeloce"
    MP12_RIBA = "MP12_RIBA"
    MP13_MAV = "MP13_MAV"
    MP14_QUIETANZA_ERARIO = "MP14_QuietanzaErario"
    MP15_GIROCONTO = "MP15_Giroconto"
    MP16_DOMICILIAZIONE_BANCARIA = "MP16_DomiciliazioneBancaria"
    MP17_DOMICILIAZIONE_POSTALE = "MP17_DomiciliazionePostale"
    MP18_BOLLETTINO_POSTALE = "MP18_BollettinoPostale"
    MP19_SEPA_DIRECT_DEBIT = "MP19_SEPADirectDebit"
    MP20_SEPA_DIRECT_DEBIT_CORE = "MP20_SEPADirectDebitCORE"
    MP21_SEPA_DIRECT_DEBIT_B2B = "MP21_SEPADirectDebitB2B"
    MP22_TRATTENUTA = "MP22_Trattenuta"
    MP23_PAGOPA = "MP23_PagoPA"


class EsigibilitaIVA(str, Enum):
    """Esigibilità IVA"""
    I = "I"  # Immediata
    D = "D"  # Differita
    S = "S"  # Scissione pagamenti
