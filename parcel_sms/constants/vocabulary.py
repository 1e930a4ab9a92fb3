# parcel_sms/constants/vocabulary.py
# Courier vocabulary shared by the field extractors. Order inside each list
# matters where it is joined into a regex alternation.

CARRIERS = ["近邻宝", "丰巢", "菜鸟", "中通", "顺丰", "韵达", "圆通", "申通", "京东", "极兔", "邮政", "兔喜"]

# "<n>号<suffix>" lockers
LOCKER_SUFFIXES = ["兔喜快递柜", "快递柜", "丰巢柜", "蜂巢柜", "熊猫柜", "柜"]

# suffixes accepted after a carrier name or a placement verb
LOCATION_SUFFIXES = [
    "驿站", "快递柜", "快递点", "柜", "室", "号", "栋", "楼", "单元",
    "小区", "学校", "食堂", "医院",
]

# wider list for the unanchored scan
GENERIC_LOCATION_SUFFIXES = [
    "驿站", "快递柜", "快递点", "快递室", "快递站", "门牌", "柜", "室", "号", "栋", "楼",
    "单元", "小区", "花园", "苑", "广场", "大厦", "超市", "便利店", "学校", "食堂",
    "医院", "银行", "校内", "校外", "路", "街", "巷",
]

PLACEMENT_VERBS = ["存放于", "放在", "送至", "到", "位于", "放至", "送达", "放入"]

ADDRESS_LABELS = r"(?:取件|取货|提货)(?:地址|地点)"

CODE_CUES = [
    r"取件码为?",
    r"提货号为?",
    r"取货码为?",
    r"提货码为?",
    r"签收码",
    r"签收编号",
    r"提货编码",
    r"收货编码",
    r"凭(?:取件)?(?:code|码)?",
    r"pick-?up\s*code",
    r"collection\s*(?:number|code)",
    r"快递",
    r"京东",
    r"天猫",
    r"中通",
    r"顺丰",
    r"韵达",
    r"菜鸟",
]

# Stripped from address candidates. Longer phrases first so "已到达" is not
# broken up by "到".
NOISE_WORDS = [
    "您的包裹", "您的快递", "已到达", "已送达", "到达", "送达", "放入", "放至",
    "位于", "取件", "尽快", "及时", "速来", "请", "凭", "到",
]

BRACKETS = "『「【([」』】)]"
PUNCTUATION = BRACKETS + ",，。！？!?|｜:：;；、\"'“”‘’"

DATE_UNITS = "年月日"
