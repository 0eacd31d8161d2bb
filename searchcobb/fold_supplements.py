"""
Supplemental fold data.

UnicodeData.txt leaves several Japanese and enclosed forms without a
decomposition. These tables fill the gaps:

- HAN_JP_1981: old-form Han characters from the Joyo and Jinmeiyo lists
  mapped to their new forms. These override any existing decomposition.
- KANA_SUPPLEMENT: Kana Supplement and Kana Extended-A (hentaigana and
  historic kana) mapped to modern kana.
- ENCLOSED_ALPHANUMERIC and ENCLOSED_ALPHANUMERIC_SUPPLEMENT: dingbat and
  negative circled numbers and squared Latin sequences.

The last three are only applied where UnicodeData.txt has no mapping.
"""

from typing import Dict


HAN_JP_1981: Dict[str, str] = {
    # 常用漢字表
    "亞": "亜", "惡": "悪", "壓": "圧", "圍": "囲", "爲": "為", "醫": "医", "壹": "壱", "逸": "逸",
    "稻": "稲", "飮": "飲", "隱": "隠", "營": "営", "榮": "栄", "衞": "衛", "驛": "駅", "謁": "謁",
    "圓": "円", "緣": "縁", "艷": "艶", "鹽": "塩", "奧": "奥", "應": "応", "橫": "横", "歐": "欧",
    "毆": "殴", "黃": "黄", "溫": "温", "穩": "穏", "假": "仮", "價": "価", "禍": "禍", "畫": "画",
    "會": "会", "壞": "壊", "悔": "悔", "懷": "懐", "海": "海", "繪": "絵", "慨": "慨", "槪": "概",
    "擴": "拡", "殼": "殻", "覺": "覚", "學": "学", "嶽": "岳", "樂": "楽", "喝": "喝", "渴": "渇",
    "褐": "褐", "勸": "勧", "卷": "巻", "寬": "寛", "歡": "歓", "漢": "漢", "罐": "缶", "觀": "観",
    "關": "関", "陷": "陥", "顏": "顔", "器": "器", "既": "既", "歸": "帰", "氣": "気", "祈": "祈",
    "龜": "亀", "僞": "偽", "戲": "戯", "犧": "犠", "舊": "旧", "據": "拠", "擧": "挙", "虛": "虚",
    "峽": "峡", "挾": "挟", "狹": "狭", "鄕": "郷", "響": "響", "曉": "暁", "勤": "勤", "謹": "謹",
    "區": "区", "驅": "駆", "勳": "勲", "薰": "薫", "徑": "径", "惠": "恵", "揭": "掲", "溪": "渓",
    "經": "経", "繼": "継", "莖": "茎", "螢": "蛍", "輕": "軽", "鷄": "鶏", "藝": "芸", "擊": "撃",
    "缺": "欠", "儉": "倹", "劍": "剣", "圈": "圏", "檢": "検", "權": "権", "獻": "献", "硏": "研",
    "縣": "県", "險": "険", "顯": "顕", "驗": "験", "嚴": "厳", "效": "効", "廣": "広", "恆": "恒",
    "鑛": "鉱", "號": "号", "國": "国", "穀": "穀", "黑": "黒", "濟": "済", "碎": "砕", "齋": "斎",
    "劑": "剤", "櫻": "桜", "册": "冊", "殺": "殺", "雜": "雑", "參": "参", "慘": "惨", "棧": "桟",
    "蠶": "蚕", "贊": "賛", "殘": "残", "祉": "祉", "絲": "糸", "視": "視", "齒": "歯", "兒": "児",
    "辭": "辞", "濕": "湿", "實": "実", "舍": "舎", "寫": "写", "煮": "煮", "社": "社", "者": "者",
    "釋": "釈", "壽": "寿", "收": "収", "臭": "臭", "從": "従", "澁": "渋", "獸": "獣", "縱": "縦",
    "祝": "祝", "肅": "粛", "處": "処", "暑": "暑", "緖": "緒", "署": "署", "諸": "諸", "敍": "叙",
    "奬": "奨", "將": "将", "涉": "渉", "燒": "焼", "祥": "祥", "稱": "称", "證": "証", "乘": "乗",
    "剩": "剰", "壤": "壌", "孃": "嬢", "條": "条", "淨": "浄", "狀": "状", "疊": "畳", "讓": "譲",
    "釀": "醸", "囑": "嘱", "觸": "触", "寢": "寝", "愼": "慎", "眞": "真", "神": "神", "盡": "尽",
    "圖": "図", "粹": "粋", "醉": "酔", "隨": "随", "髓": "髄", "數": "数", "樞": "枢", "瀨": "瀬",
    "聲": "声", "靜": "静", "齊": "斉", "攝": "摂", "竊": "窃", "節": "節", "專": "専", "戰": "戦",
    "淺": "浅", "潛": "潜", "纖": "繊", "踐": "践", "錢": "銭", "禪": "禅", "曾": "曽", "祖": "祖",
    "僧": "僧", "雙": "双", "壯": "壮", "層": "層", "搜": "捜", "插": "挿", "巢": "巣", "爭": "争",
    "瘦": "痩", "總": "総", "莊": "荘", "裝": "装", "騷": "騒", "增": "増", "憎": "憎", "臟": "臓",
    "藏": "蔵", "贈": "贈", "卽": "即", "屬": "属", "續": "続", "墮": "堕", "體": "体", "對": "対",
    "帶": "帯", "滯": "滞", "臺": "台", "瀧": "滝", "擇": "択", "澤": "沢", "單": "単", "嘆": "嘆",
    "擔": "担", "膽": "胆", "團": "団", "彈": "弾", "斷": "断", "癡": "痴", "遲": "遅", "晝": "昼",
    "蟲": "虫", "鑄": "鋳", "著": "著", "廳": "庁", "徵": "徴", "懲": "懲", "聽": "聴", "敕": "勅",
    "鎭": "鎮", "塚": "塚", "遞": "逓", "鐵": "鉄", "轉": "転", "點": "点", "傳": "伝", "都": "都",
    "黨": "党", "盜": "盗", "燈": "灯", "當": "当", "鬭": "闘", "德": "徳", "獨": "独", "讀": "読",
    "突": "突", "屆": "届", "繩": "縄", "難": "難", "貳": "弐", "惱": "悩", "腦": "脳", "霸": "覇",
    "廢": "廃", "拜": "拝", "梅": "梅", "賣": "売", "麥": "麦", "發": "発", "髮": "髪", "拔": "抜",
    "繁": "繁", "晚": "晩", "蠻": "蛮", "卑": "卑", "碑": "碑", "祕": "秘", "濱": "浜", "賓": "賓",
    "頻": "頻", "敏": "敏", "甁": "瓶", "侮": "侮", "福": "福", "拂": "払", "佛": "仏", "倂": "併",
    "塀": "塀", "竝": "並", "變": "変", "邊": "辺", "勉": "勉", "辨": "弁", "瓣": "弁", "辯": "弁",
    "舖": "舗", "步": "歩", "穗": "穂", "寶": "宝", "襃": "褒", "豐": "豊", "墨": "墨", "沒": "没",
    "飜": "翻", "每": "毎", "萬": "万", "滿": "満", "免": "免", "麵": "麺", "默": "黙", "餠": "餅",
    "戾": "戻", "彌": "弥", "藥": "薬", "譯": "訳", "豫": "予", "餘": "余", "與": "与", "譽": "誉",
    "搖": "揺", "樣": "様", "謠": "謡", "來": "来", "賴": "頼", "亂": "乱", "欄": "欄", "覽": "覧",
    "隆": "隆", "龍": "竜", "虜": "虜", "兩": "両", "獵": "猟", "綠": "緑", "壘": "塁", "淚": "涙",
    "類": "類", "勵": "励", "禮": "礼", "隸": "隷", "靈": "霊", "齡": "齢", "曆": "暦", "歷": "歴",
    "戀": "恋", "練": "練", "鍊": "錬", "爐": "炉", "勞": "労", "廊": "廊", "朗": "朗", "樓": "楼",
    "郞": "郎", "錄": "録", "灣": "湾",
    # 人名用漢字
    "巖": "巌", "堯": "尭", "渚": "渚", "穰": "穣", "晉": "晋", "聰": "聡", "琢": "琢", "猪": "猪",
    "禎": "禎", "槇": "槙", "祐": "祐", "遙": "遥", "祿": "禄", "瑤": "瑶",
    # その他
    "凛": "凜", "晄": "晃", "檜": "桧", "禰": "祢", "禱": "祷", "萠": "萌", "薗": "園", "駈": "駆",
    "嶋": "島", "盃": "杯", "冨": "富", "峯": "峰", "埜": "野", "凉": "涼",
}


KANA_SUPPLEMENT: Dict[str, str] = {
    # Historic Katakana
    "\U0001B000": "え",
    # Historic Hiragana and Hentaigana
    # Hentaigana
    "\U0001B002": "あ", "\U0001B003": "あ", "\U0001B004": "あ", "\U0001B005": "あ",
    "\U0001B006": "い", "\U0001B007": "い", "\U0001B008": "い", "\U0001B009": "い",
    "\U0001B00A": "う", "\U0001B00B": "う", "\U0001B00C": "う", "\U0001B00D": "う",
    "\U0001B00E": "う", "\U0001B00F": "え", "\U0001B010": "え", "\U0001B011": "え",
    "\U0001B012": "え", "\U0001B013": "え", "\U0001B014": "お", "\U0001B015": "お",
    "\U0001B016": "お", "\U0001B017": "か", "\U0001B018": "か", "\U0001B019": "か",
    "\U0001B01A": "か", "\U0001B01B": "か", "\U0001B01C": "か", "\U0001B01D": "か",
    "\U0001B01E": "か", "\U0001B01F": "か", "\U0001B020": "か", "\U0001B021": "か",
    "\U0001B022": "か", "\U0001B023": "き", "\U0001B024": "き", "\U0001B025": "き",
    "\U0001B026": "き", "\U0001B027": "き", "\U0001B028": "き", "\U0001B029": "き",
    "\U0001B02A": "き", "\U0001B02B": "く", "\U0001B02C": "く", "\U0001B02D": "く",
    "\U0001B02E": "く", "\U0001B02F": "く", "\U0001B030": "く", "\U0001B031": "く",
    "\U0001B032": "け", "\U0001B033": "け", "\U0001B034": "け", "\U0001B035": "け",
    "\U0001B036": "け", "\U0001B037": "け", "\U0001B038": "こ", "\U0001B039": "こ",
    "\U0001B03A": "こ", "\U0001B03B": "こ", "\U0001B03C": "さ", "\U0001B03D": "さ",
    "\U0001B03E": "さ", "\U0001B03F": "さ", "\U0001B040": "さ", "\U0001B041": "さ",
    "\U0001B042": "さ", "\U0001B043": "さ", "\U0001B044": "し", "\U0001B045": "し",
    "\U0001B046": "し", "\U0001B047": "し", "\U0001B048": "し", "\U0001B049": "し",
    "\U0001B04A": "す", "\U0001B04B": "す", "\U0001B04C": "す", "\U0001B04D": "す",
    "\U0001B04E": "す", "\U0001B04F": "す", "\U0001B050": "す", "\U0001B051": "す",
    "\U0001B052": "せ", "\U0001B053": "せ", "\U0001B054": "せ", "\U0001B055": "せ",
    "\U0001B056": "せ", "\U0001B057": "そ", "\U0001B058": "そ", "\U0001B059": "そ",
    "\U0001B05A": "そ", "\U0001B05B": "そ", "\U0001B05C": "そ", "\U0001B05D": "そ",
    "\U0001B05E": "た", "\U0001B05F": "た", "\U0001B060": "た", "\U0001B061": "た",
    "\U0001B062": "ち", "\U0001B063": "ち", "\U0001B064": "ち", "\U0001B065": "ち",
    "\U0001B066": "ち", "\U0001B067": "ち", "\U0001B068": "ち", "\U0001B069": "つ",
    "\U0001B06A": "つ", "\U0001B06B": "つ", "\U0001B06C": "つ", "\U0001B06D": "つ",
    "\U0001B06E": "て", "\U0001B06F": "て", "\U0001B070": "て", "\U0001B071": "て",
    "\U0001B072": "て", "\U0001B073": "て", "\U0001B074": "て", "\U0001B075": "て",
    "\U0001B076": "て", "\U0001B077": "と", "\U0001B078": "と", "\U0001B079": "と",
    "\U0001B07A": "と", "\U0001B07B": "と", "\U0001B07C": "と", "\U0001B07D": "と",
    "\U0001B07E": "な", "\U0001B07F": "な", "\U0001B080": "な", "\U0001B081": "な",
    "\U0001B082": "な", "\U0001B083": "な", "\U0001B084": "な", "\U0001B085": "な",
    "\U0001B086": "な", "\U0001B087": "に", "\U0001B088": "に", "\U0001B089": "に",
    "\U0001B08A": "に", "\U0001B08B": "に", "\U0001B08C": "に", "\U0001B08D": "に",
    "\U0001B08E": "に", "\U0001B08F": "ぬ", "\U0001B090": "ぬ", "\U0001B091": "ぬ",
    "\U0001B092": "ね", "\U0001B093": "ね", "\U0001B094": "ね", "\U0001B095": "ね",
    "\U0001B096": "ね", "\U0001B097": "ね", "\U0001B098": "ね", "\U0001B099": "の",
    "\U0001B09A": "の", "\U0001B09B": "の", "\U0001B09C": "の", "\U0001B09D": "の",
    "\U0001B09E": "は", "\U0001B09F": "は", "\U0001B0A0": "は", "\U0001B0A1": "は",
    "\U0001B0A2": "は", "\U0001B0A3": "は", "\U0001B0A4": "は", "\U0001B0A5": "は",
    "\U0001B0A6": "は", "\U0001B0A7": "は", "\U0001B0A8": "は", "\U0001B0A9": "ひ",
    "\U0001B0AA": "ひ", "\U0001B0AB": "ひ", "\U0001B0AC": "ひ", "\U0001B0AD": "ひ",
    "\U0001B0AE": "ひ", "\U0001B0AF": "ひ", "\U0001B0B0": "ふ", "\U0001B0B1": "ふ",
    "\U0001B0B2": "ふ", "\U0001B0B3": "へ", "\U0001B0B4": "へ", "\U0001B0B5": "へ",
    "\U0001B0B6": "へ", "\U0001B0B7": "へ", "\U0001B0B8": "へ", "\U0001B0B9": "へ",
    "\U0001B0BA": "ほ", "\U0001B0BB": "ほ", "\U0001B0BC": "ほ", "\U0001B0BD": "ほ",
    "\U0001B0BE": "ほ", "\U0001B0BF": "ほ", "\U0001B0C0": "ほ", "\U0001B0C1": "ほ",
    "\U0001B0C2": "ま", "\U0001B0C3": "ま", "\U0001B0C4": "ま", "\U0001B0C5": "ま",
    "\U0001B0C6": "ま", "\U0001B0C7": "ま", "\U0001B0C8": "ま", "\U0001B0C9": "み",
    "\U0001B0CA": "み", "\U0001B0CB": "み", "\U0001B0CC": "み", "\U0001B0CD": "み",
    "\U0001B0CE": "み", "\U0001B0CF": "み", "\U0001B0D0": "む", "\U0001B0D1": "む",
    "\U0001B0D2": "む", "\U0001B0D3": "む", "\U0001B0D4": "め", "\U0001B0D5": "め",
    "\U0001B0D6": "め", "\U0001B0D7": "も", "\U0001B0D8": "も", "\U0001B0D9": "も",
    "\U0001B0DA": "も", "\U0001B0DB": "も", "\U0001B0DC": "も", "\U0001B0DD": "や",
    "\U0001B0DE": "や", "\U0001B0DF": "や", "\U0001B0E0": "や", "\U0001B0E1": "や",
    "\U0001B0E2": "や", "\U0001B0E3": "ゆ", "\U0001B0E4": "ゆ", "\U0001B0E5": "ゆ",
    "\U0001B0E6": "ゆ", "\U0001B0E7": "よ", "\U0001B0E8": "よ", "\U0001B0E9": "よ",
    "\U0001B0EA": "よ", "\U0001B0EB": "よ", "\U0001B0EC": "よ", "\U0001B0ED": "ら",
    "\U0001B0EE": "ら", "\U0001B0EF": "ら", "\U0001B0F0": "ら", "\U0001B0F1": "り",
    "\U0001B0F2": "り", "\U0001B0F3": "り", "\U0001B0F4": "り", "\U0001B0F5": "り",
    "\U0001B0F6": "り", "\U0001B0F7": "り", "\U0001B0F8": "る", "\U0001B0F9": "る",
    "\U0001B0FA": "る", "\U0001B0FB": "る", "\U0001B0FC": "る", "\U0001B0FD": "る",
    "\U0001B0FE": "れ", "\U0001B0FF": "れ", "\U0001B100": "れ", "\U0001B101": "れ",
    "\U0001B102": "ろ", "\U0001B103": "ろ", "\U0001B104": "ろ", "\U0001B105": "ろ",
    "\U0001B106": "ろ", "\U0001B107": "ろ", "\U0001B108": "わ", "\U0001B109": "わ",
    "\U0001B10A": "わ", "\U0001B10B": "わ", "\U0001B10C": "わ", "\U0001B10D": "ゐ",
    "\U0001B10E": "ゐ", "\U0001B10F": "ゐ", "\U0001B110": "ゐ", "\U0001B111": "ゐ",
    "\U0001B112": "ゑ", "\U0001B113": "ゑ", "\U0001B114": "ゑ", "\U0001B115": "ゑ",
    "\U0001B116": "を", "\U0001B117": "を", "\U0001B118": "を", "\U0001B119": "を",
    "\U0001B11A": "を", "\U0001B11B": "を", "\U0001B11C": "を", "\U0001B11D": "ん",
    "\U0001B11E": "ん",
}


ENCLOSED_ALPHANUMERIC: Dict[str, str] = {
    "❶": "1", "❷": "2", "❸": "3", "❹": "4", "❺": "5",
    "❻": "6", "❼": "7", "❽": "8", "❾": "9", "❿": "10",
    "➀": "1", "➁": "2", "➂": "3", "➃": "4", "➄": "5",
    "➅": "6", "➆": "7", "➇": "8", "➈": "9", "➉": "10",
    "➊": "1", "➋": "2", "➌": "3", "➍": "4", "➎": "5",
    "➏": "6", "➐": "7", "➑": "8", "➒": "9", "➓": "10",
    "⓫": "11", "⓬": "12", "⓭": "13", "⓮": "14", "⓯": "15",
    "⓰": "16", "⓱": "17", "⓲": "18", "⓳": "19", "⓴": "20",
    "⓵": "1", "⓶": "2", "⓷": "3", "⓸": "4", "⓹": "5",
    "⓺": "6", "⓻": "7", "⓼": "8", "⓽": "9", "⓾": "10",
    "⓿": "0",
}


ENCLOSED_ALPHANUMERIC_SUPPLEMENT: Dict[str, str] = {
    # Number with full stop
    "\U0001F100": "0.",
    # Numbers with comma
    "\U0001F101": "0,", "\U0001F102": "1,", "\U0001F103": "2,", "\U0001F104": "3,",
    "\U0001F105": "4,", "\U0001F106": "5,", "\U0001F107": "6,", "\U0001F108": "7,",
    "\U0001F109": "8,", "\U0001F10A": "9,",
    # Circled sans-serif digits
    "\U0001F10B": "0", "\U0001F10C": "0",
    # Parenthesized Latin letters
    "\U0001F110": "(A)", "\U0001F111": "(B)", "\U0001F112": "(C)", "\U0001F113": "(D)",
    "\U0001F114": "(E)", "\U0001F115": "(F)", "\U0001F116": "(G)", "\U0001F117": "(H)",
    "\U0001F118": "(I)", "\U0001F119": "(J)", "\U0001F11A": "(K)", "\U0001F11B": "(L)",
    "\U0001F11C": "(M)", "\U0001F11D": "(N)", "\U0001F11E": "(O)", "\U0001F11F": "(P)",
    "\U0001F120": "(Q)", "\U0001F121": "(R)", "\U0001F122": "(S)", "\U0001F123": "(T)",
    "\U0001F124": "(U)", "\U0001F125": "(V)", "\U0001F126": "(W)", "\U0001F127": "(X)",
    "\U0001F128": "(Y)", "\U0001F129": "(Z)",
    # Latin letter with tortoise shell brackets
    "\U0001F12A": "〔S〕",
    # Circled italic Latin letters
    "\U0001F12B": "C", "\U0001F12C": "R",
    # Circled Latin letters or letter sequences
    "\U0001F12D": "CD", "\U0001F12E": "WZ",
    # Squared Latin letters
    "\U0001F130": "A", "\U0001F131": "B", "\U0001F132": "C", "\U0001F133": "D",
    "\U0001F134": "E", "\U0001F135": "F", "\U0001F136": "G", "\U0001F137": "H",
    "\U0001F138": "I", "\U0001F139": "J", "\U0001F13A": "K", "\U0001F13B": "L",
    "\U0001F13C": "M", "\U0001F13D": "N", "\U0001F13E": "O", "\U0001F13F": "P",
    "\U0001F140": "Q", "\U0001F141": "R", "\U0001F142": "S", "\U0001F143": "T",
    "\U0001F144": "U", "\U0001F145": "V", "\U0001F146": "W", "\U0001F147": "X",
    "\U0001F148": "Y", "\U0001F149": "Z", "\U0001F14A": "HV", "\U0001F14B": "MV",
    "\U0001F14C": "SD", "\U0001F14D": "SS", "\U0001F14E": "PPV", "\U0001F14F": "WC",
    # White on black circled Latin letters
    "\U0001F150": "A", "\U0001F151": "B", "\U0001F152": "C", "\U0001F153": "D",
    "\U0001F154": "E", "\U0001F155": "F", "\U0001F156": "G", "\U0001F157": "H",
    "\U0001F158": "I", "\U0001F159": "J", "\U0001F15A": "K", "\U0001F15B": "L",
    "\U0001F15C": "M", "\U0001F15D": "N", "\U0001F15E": "O", "\U0001F15F": "P",
    "\U0001F160": "Q", "\U0001F161": "R", "\U0001F162": "S", "\U0001F163": "T",
    "\U0001F164": "U", "\U0001F165": "V", "\U0001F166": "W", "\U0001F167": "X",
    "\U0001F168": "Y", "\U0001F169": "Z",
    # Raised squared Latin sequences
    "\U0001F16A": "MC", "\U0001F16B": "MD", "\U0001F16C": "MR",
    # White on black squared Latin letters
    "\U0001F170": "A", "\U0001F171": "B", "\U0001F172": "C", "\U0001F173": "D",
    "\U0001F174": "E", "\U0001F175": "F", "\U0001F176": "G", "\U0001F177": "H",
    "\U0001F178": "I", "\U0001F179": "J", "\U0001F17A": "K", "\U0001F17B": "L",
    "\U0001F17C": "M", "\U0001F17D": "N", "\U0001F17E": "O", "\U0001F17F": "P",
    "\U0001F180": "Q", "\U0001F181": "R", "\U0001F182": "S", "\U0001F183": "T",
    "\U0001F184": "U", "\U0001F185": "V", "\U0001F186": "W", "\U0001F187": "X",
    "\U0001F188": "Y", "\U0001F189": "Z", "\U0001F18A": "P", "\U0001F18B": "IC",
    "\U0001F18C": "PA", "\U0001F18D": "SA", "\U0001F18E": "AB", "\U0001F18F": "WC",
    # Squared Latin letter sequences
    "\U0001F190": "DJ", "\U0001F191": "CL", "\U0001F192": "COOL", "\U0001F193": "FREE",
    "\U0001F194": "ID", "\U0001F195": "NEW", "\U0001F196": "NG", "\U0001F197": "OK",
    "\U0001F198": "SOS", "\U0001F199": "UP!", "\U0001F19A": "VS",
    # Squared Latin letter sequences from ARIB STD B62
    "\U0001F19B": "3D", "\U0001F19C": "2NDSCR", "\U0001F19D": "2K", "\U0001F19E": "4K",
    "\U0001F19F": "8K", "\U0001F1A0": "5.1", "\U0001F1A1": "7.1", "\U0001F1A2": "22.2",
    "\U0001F1A3": "60P", "\U0001F1A4": "120P", "\U0001F1A5": "d", "\U0001F1A6": "HC",
    "\U0001F1A7": "HDR", "\U0001F1A8": "HI_RES", "\U0001F1A9": "LOSSLESS", "\U0001F1AA": "SHV",
    "\U0001F1AB": "UHD", "\U0001F1AC": "VOD",
    # Miscellaneous symbol
    "\U0001F1AD": "M",
    # Regional indicators are left alone: folding a flag to two letters
    # creates phantom country codes across flag boundaries (CAZW holds AZ).
}
