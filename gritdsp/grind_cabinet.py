"""Speaker cabinet voicing used by the grind amp."""

from __future__ import annotations

from .cabinet import CabinetFilter

_GRIND_COEFFICIENTS = (
    (1.29550481610475132, 0.19713872057074355),
    (1.42302569895462616, 0.30599505521284787),
    (1.28728195804197565, 0.23168333460446133),
    (0.88553784290822690, 0.14263256172918892),
    (0.37129054918432319, 0.00150040944205920),
    (-0.12150959412556320, -0.32776273620569107),
    (-0.44900065463203775, -0.74101214925298819),
    (-0.54058781908186482, -1.07821707459008387),
    (-0.49361966401791391, -1.23540109014850508),
    (-0.39819495093078133, -1.11247213730917749),
    (-0.31379279985435521, -0.80330360359638298),
    (-0.30744359242808555, -0.42132528876858205),
    (-0.33943170284673974, -0.09183418349389982),
    (-0.33838775119286391, 0.06453051658561271),
    (-0.30682305697961665, 0.09549380253249232),
    (-0.23408741339295336, 0.08083404732361277),
    (-0.10411746814025019, -0.00253651281245780),
    (0.00133623776084696, -0.04447267870865820),
    (0.02461903992114161, 0.07530671732655550),
    (0.02086715842475373, 0.22795860236804899),
    (0.02761433637100917, 0.26108320417844094),
    (0.04475285369162533, 0.19160705011061663),
    (0.09447338372862381, 0.03681550508743799),
    (0.13445890343722280, -0.13713036462146147),
    (0.13872868945088121, -0.22401242373298191),
    (0.14915650097434549, -0.26718804981526367),
    (0.12766643217091783, -0.27745664795660430),
    (0.03675849788393101, -0.18338278173550679),
    (-0.06307306864232835, -0.06089480869040766),
    (-0.14947389348962944, -0.04642103054798480),
    (-0.25235266566401526, -0.08423062596460507),
    (-0.33496344048679683, -0.09808328256677995),
    (-0.36590030482175445, -0.10622650888958179),
    (-0.35015197011464372, -0.08982043516016047),
    (-0.26808437585665090, -0.00735561860229533),
    (-0.11624318543291220, 0.07142484314510467),
    (0.05617084165377551, 0.11785854050350089),
    (0.20540028692589385, 0.20479174663329586),
    (0.30455415003043818, 0.29074864580096849),
    (0.33810750937829476, 0.29182307921316802),
    (0.31936133365277430, 0.26535537727394987),
    (0.27388548321981876, 0.19735049990538350),
    (0.21454597517994098, 0.06415909270247236),
    (0.15001045817707717, -0.03831118543404573),
    (0.07283437284653138, -0.09281952429543777),
    (-0.03917872184241358, -0.14306291461398810),
    (-0.16695932032148642, -0.19138995946950504),
    (-0.27055854466909462, -0.22531296466343192),
    (-0.33256357307578271, -0.23305840475692102),
    (-0.33459770116834442, -0.24091822618917569),
    (-0.27156687236338090, -0.24062938573512443),
    (-0.17197093288412094, -0.19083085091993421),
    (-0.06738628195910543, -0.10268609751019808),
    (0.00222429218204290, 0.01439664435720548),
    (0.01346992803494091, 0.15947137113534526),
    (-0.02038911881377448, 0.26763170752416160),
    (-0.08233579178189687, 0.29415931086406055),
    (-0.15447855089824883, 0.26489186990840807),
    (-0.20518281113362655, 0.16135382257522859),
    (-0.22244686050232007, -0.00847180390247432),
    (-0.21849243134998034, -0.14460595245753741),
    (-0.20256105734574054, -0.18932793221831667),
    (-0.18604070054295399, -0.17250665610927965),
    (-0.17222844322058231, -0.12992472027850357),
    (-0.14447856616566443, -0.09089219002147308),
    (-0.10385520794251019, -0.08600465834570559),
    (-0.07124435678265063, -0.09071532210549428),
    (-0.05216857461197572, -0.06794061706070262),
    (-0.05235381920184123, -0.02818101717909346),
    (-0.07569701245553526, 0.00634228544764946),
    (-0.10320125382718826, 0.02751486906644141),
    (-0.12122120969079088, 0.05434007312178933),
    (-0.13438969117200902, 0.09135218559713874),
    (-0.13534390437529981, 0.10437672041458675),
    (-0.11424128854188388, 0.08693450726462598),
    (-0.08166894518596159, 0.06949989431475120),
    (-0.04293976378555305, 0.05718625137421843),
    (0.00933076320644409, 0.01728285211520138),
    (0.06450430362918153, -0.02492994833691022),
    (0.10187400687649277, -0.03578455940532403),
    (0.11039763294094571, -0.03995523517573508),
    (0.08557960776024547, -0.03482514309492527),
    (0.02730881850805332, -0.00514750108411127),
)


def grind_cabinet() -> CabinetFilter:
    """The 4x12 speaker cabinet used by the grind amp."""
    return CabinetFilter(_GRIND_COEFFICIENTS)