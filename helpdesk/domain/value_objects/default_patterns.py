"""Built-in pattern tables.

Text is passed through ``normalize_text`` before matching, so patterns are
written in lowercase, with ``е`` for ``ё`` and a plain ``'`` for every Uzbek
apostrophe variant.
"""

from helpdesk.domain.value_objects.pattern_catalog import ANY_LANGUAGE, PatternCatalog, PatternRule

CATALOG_VERSION = "2024.3"

RU = "ru"
UZ_LATIN = "uz_latin"
UZ_CYRILLIC = "uz_cyrillic"
EN = "en"


def _rule(group, name, language, *patterns, urgency=None, auto_reply=False) -> PatternRule:
    return PatternRule(
        group=group,
        name=name,
        patterns=patterns,
        language=language,
        urgency=urgency,
        auto_reply=auto_reply,
    )


# ─── Fixed-form utterances (matched against the whole message) ───

_SIMPLE_INTENT_RULES = [
    _rule(
        "greeting", "ru_greeting", RU,
        r"(добрый|доброе|доброй)\s+(день|утро|вечер|ночи)",
        r"здравствуй(те)?|здрасте|привет(ствую)?|приветик|салам(\s+алейкум)?|салем",
        auto_reply=True,
    ),
    _rule(
        "greeting", "uz_latin_greeting", UZ_LATIN,
        r"ass?alomu?\s*alaykum|assalom|salom(\s+aleykum)?|salomlar|xayrli\s+(kun|tong|kech)",
        auto_reply=True,
    ),
    _rule(
        "greeting", "uz_cyrillic_greeting", UZ_CYRILLIC,
        r"ассалому?\s*алайкум|ассалом|салом(\s+алейкум)?|хайрли\s+(кун|тонг|кеч)",
        auto_reply=True,
    ),
    _rule(
        "greeting", "en_greeting", EN,
        r"hi|hello|hey|good\s+(morning|afternoon|evening)",
        auto_reply=True,
    ),
    _rule(
        "gratitude", "ru_gratitude", RU,
        r"((ок|окей|хорошо|понятно|ясно|отлично|супер)[,\s]+)?"
        r"(спасибо|спс|спасиб|благодарю|благодарим)(\s+(вам|большое|огромное|за\s+помощь|за\s+ответ))*",
        auto_reply=True,
    ),
    _rule(
        "gratitude", "uz_latin_gratitude", UZ_LATIN,
        r"((ok|yaxshi|tushunarli|zo'r)[,\s]+)?(katta\s+)?(rahmat|raxmat|rahmatlar|tashakkur)(\s+(sizga|katta|kattakon))*",
        auto_reply=True,
    ),
    _rule(
        "gratitude", "uz_cyrillic_gratitude", UZ_CYRILLIC,
        r"((ок|яхши|тушунарли|зўр)[,\s]+)?(катта\s+)?(рахмат|раҳмат|рахматлар|ташаккур)(\s+(сизга|катта|каттакон))*",
        auto_reply=True,
    ),
    _rule(
        "gratitude", "en_gratitude", EN,
        r"(ok[,\s]+)?(thanks?|thank\s+you|thx|ty)(\s+(so\s+much|a\s+lot|very\s+much))?",
        auto_reply=True,
    ),
    _rule(
        "closing", "ru_closing", RU,
        r"до\s+свидания|всего\s+(доброго|хорошего)|хорошего\s+дня|до\s+встречи|пока|вопрос\s+(решен|закрыт)",
        auto_reply=True,
    ),
    _rule(
        "closing", "uz_latin_closing", UZ_LATIN,
        r"xayr|hayr|ko'rishguncha|yaxshi\s+qoling|savol\s+hal\s+bo'ldi",
        auto_reply=True,
    ),
    _rule(
        "closing", "uz_cyrillic_closing", UZ_CYRILLIC,
        r"хайр|кўришгунча|яхши\s+қолинг|савол\s+ҳал\s+бўлди",
        auto_reply=True,
    ),
    _rule(
        "closing", "en_closing", EN,
        r"bye|goodbye|see\s+you|have\s+a\s+(nice|good)\s+day",
        auto_reply=True,
    ),
    _rule(
        "confirmation", "ru_confirmation", RU,
        r"ок|окей|оке|ага|угу|да|хорошо|понятно|ясно|принято|понял[а]?|договорились|отлично|супер|норм|ладно",
    ),
    _rule(
        "confirmation", "uz_latin_confirmation", UZ_LATIN,
        r"ok|okey|ha|xa|hop|xop|mayli|tushunarli|tushundim|yaxshi|bo'ldi|kelishdik|albatta",
    ),
    _rule(
        "confirmation", "uz_cyrillic_confirmation", UZ_CYRILLIC,
        r"ха|хоп|майли|тушунарли|тушундим|яхши|бўлди|келишдик|албатта",
    ),
    _rule(
        "confirmation", "en_confirmation", EN,
        r"okay|yes|yep|sure|got\s+it|understood|fine|noted|\+|👍|👌",
    ),
    _rule(
        "faq_pricing", "ru_pricing", RU,
        r"(сколько\s+(стоит|стоят)|какая\s+цена|какие\s+цены|цена|стоимость|прайс|тарифы?)(\s+на\s+\w+)?\s*\?*",
        auto_reply=True,
    ),
    _rule(
        "faq_pricing", "uz_pricing", UZ_LATIN,
        r"(narxi?\s+qancha|qancha\s+turadi|narxlar|tarif(lar)?)\s*\?*",
        auto_reply=True,
    ),
    _rule(
        "faq_pricing", "uz_cyrillic_pricing", UZ_CYRILLIC,
        r"(нархи?\s+қанча|қанча\s+туради|нархлар)\s*\?*",
        auto_reply=True,
    ),
    _rule(
        "faq_pricing", "en_pricing", EN,
        r"(how\s+much(\s+does\s+it\s+cost)?|what\s+is\s+the\s+price|pricing|price\s+list)\s*\?*",
        auto_reply=True,
    ),
    _rule(
        "faq_hours", "ru_hours", RU,
        r"(во\s+сколько\s+(вы\s+)?(работаете|открываетесь|закрываетесь)|график\s+работы"
        r"|режим\s+работы|до\s+скольки\s+(вы\s+)?работаете|часы\s+работы)\s*\?*",
        auto_reply=True,
    ),
    _rule(
        "faq_hours", "uz_hours", UZ_LATIN,
        r"(ish\s+vaqti|soat\s+nechida(\s+ochilasiz)?|nechagacha\s+ishlaysiz)\s*\?*",
        auto_reply=True,
    ),
    _rule(
        "faq_hours", "uz_cyrillic_hours", UZ_CYRILLIC,
        r"(иш\s+вақти|соат\s+нечида|нечагача\s+ишлайсиз)\s*\?*",
        auto_reply=True,
    ),
    _rule(
        "faq_hours", "en_hours", EN,
        r"(working\s+hours|opening\s+hours|when\s+are\s+you\s+open|what\s+time\s+do\s+you\s+(open|close))\s*\?*",
        auto_reply=True,
    ),
    _rule(
        "faq_contacts", "ru_contacts", RU,
        r"(ваш\s+)?(номер\s+телефона|телефон|контакты|адрес\s+офиса|как\s+с\s+вами\s+связаться|где\s+вы\s+находитесь)\s*\?*",
        auto_reply=True,
    ),
    _rule(
        "faq_contacts", "uz_contacts", UZ_LATIN,
        r"(telefon\s+raqam(ingiz)?|kontakt(lar)?|manzil(ingiz)?|qayerdasiz|siz\s+bilan\s+qanday\s+bog'lansa\s+bo'ladi)\s*\?*",
        auto_reply=True,
    ),
    _rule(
        "faq_contacts", "uz_cyrillic_contacts", UZ_CYRILLIC,
        r"(телефон\s+рақам(ингиз)?|манзил(ингиз)?|қаердасиз)\s*\?*",
        auto_reply=True,
    ),
    _rule(
        "faq_contacts", "en_contacts", EN,
        r"(contacts?|phone\s+number|your\s+address|how\s+(can|do)\s+i\s+contact\s+you)\s*\?*",
        auto_reply=True,
    ),
]


# ─── Problem vocabulary per language ───

_PROBLEM_RULES = [
    _rule(
        "problem", "ru_negated_verbs", RU,
        r"\bне\s*(работа|открыва|загружа|грузит|гружит|приход|пришл|печата|отобража|обновля"
        r"|синхронизир|проход|сохраня|отправля|срабатыва|включа|показыва|считыва|пробива)",
        r"\bне\s*(могу|можем|получается|удается|видно|видит|найден)",
    ),
    _rule(
        "problem", "ru_error_words", RU,
        r"ошибк|ошибочн|сбой|глюч|глюк|\bбаг|виснет|завис|тормоз|лагает|вылета|слома|сломан",
        r"белый\s+экран|проблем|неправильн|неверн|пропал|пропад|застрял|не\s+то\b",
    ),
    _rule(
        "problem", "uz_latin_negated_verbs", UZ_LATIN,
        r"ishlama(y|di|ydi|ypti|yapti|yvotti|yotti)",
        r"ochilma|yuklanma|saqlanma|o'zgarma|ko'rinma|bosilma",
        r"kelma(y|di|ydi|ypti|yapti|yvotti)|chiqma(y|di|ydi|ypti|yapti)|tushma(y|di|ydi|yapti)",
        r"\b[a-z']{3,}(madi|maydi|maypti|mayapti|mayotti|mayvotti)\b",
    ),
    _rule(
        "problem", "uz_latin_error_words", UZ_LATIN,
        r"\bxato|\bhato|muammo|nosozlik|buzil|singan|noto'?g'?ri|to'?g'?ri\s+emas",
        r"topilmadi|qotib\s+qol|turib\s+qol|o'chib\s+qol",
    ),
    _rule(
        "problem", "uz_latin_transliteration", UZ_LATIN,
        r"\bne\s*rabota|oshibk|glyuk|zavis|slomal|problema",
    ),
    _rule(
        "problem", "uz_cyrillic_negated_verbs", UZ_CYRILLIC,
        r"ишлама(й|ди|йди|йпти|япти|ётти)|очилма|юкланма|сақланма|ўзгарма|кўринма|босилма",
        r"келма(й|ди|йди|япти)|чиқма(й|ди|йди|япти)|тушма(й|ди|япти)",
        r"[а-яўқғҳ]{3,}(мади|майди|маяпти|майпти|маётди)\b",
    ),
    _rule(
        "problem", "uz_cyrillic_error_words", UZ_CYRILLIC,
        r"\bхато|муаммо|носозлик|бузил|синган|нотўғри|тўғри\s+эмас|топилмади|қотиб\s+қол|туриб\s+қол",
    ),
    _rule(
        "problem", "en_failure", EN,
        r"not\s+working|(doesn'?t|does\s+not|don'?t|isn'?t|won'?t)\s+(work|open|load|print|sync|show)",
        r"\bcan'?t\b|\bcannot\b|unable\s+to|\bbroken\b|\bbugs?\b|\bcrash|\bwrong\b|incorrect",
        r"\bmissing\b|not\s+found|\bstuck\b|\bproblems?\b|\bissues?\b|\bfail(s|ed|ing|ure)?\b",
    ),
    _rule(
        "error_tokens", "raw_error", ANY_LANGUAGE,
        r"\binvalid\b|exception|\bfailed\b|\bfailure\b|traceback|stack\s*trace",
        r"correlation[_\s-]?id|(request|trace|transaction)[_-]?id\s*[:=]",
        r"\berror\s*[:=]|\.error\b|\b[a-z]+error\b|\berr_[a-z_]+|\belifecycle\b|\bts\d{4}\b",
        r"\b(status|code|http)\s*[:=]?\s*[45]\d\d\b|\bundefined\b|null\s*pointer|nullreference",
        r"timed?\s*out|timeout|таймаут",
        r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}",
    ),
]


# ─── Contextual problem signals ───

_CONTEXT_RULES = [
    _rule("contrast", "uz_latin_contrast", UZ_LATIN, r"\blekin\b|\blekn\b|\bammo\b|\bbiroq\b|\bfaqat\b|\bfakat\b"),
    _rule("contrast", "uz_cyrillic_contrast", UZ_CYRILLIC, r"лекин|\bлекн\b|\bаммо\b|бироқ|\bфақат\b"),
    _rule("contrast", "ru_contrast", RU, r"\bно\b|\bоднако\b|\bа\s+вот\b|\bхотя\b"),
    _rule("contrast", "en_contrast", EN, r"\bbut\b|\bhowever\b|\bthough\b"),
    _rule(
        "different", "different", ANY_LANGUAGE,
        r"boshqa|бошқа|\bдруг(ой|ая|ое|ую|ие|им|ого)\b|\bне\s+(тот|та|те|то)\b|different|another",
    ),
    _rule(
        "business_context", "receipt", ANY_LANGUAGE,
        r"\bchek|\bчек|квитанц|\breceipt",
    ),
    _rule(
        "business_context", "order", ANY_LANGUAGE,
        r"buyurtma|буюртма|\bzakaz|заказ|\border",
    ),
    _rule(
        "business_context", "branch", ANY_LANGUAGE,
        r"\bfilial|филиал|\bbranch",
    ),
    _rule(
        "business_context", "discount", ANY_LANGUAGE,
        r"skidk|скидк|chegirma|чегирма|discount|aksiya|акци[яиюй]|promo",
    ),
    _rule(
        "business_context", "money", ANY_LANGUAGE,
        r"\bpul\b|\bпул\b|to'?lov|тўлов|оплат|\boplata|payment|narx|нарх|\bsumma|сумм|\bцен|price|\bso'?m\b|сўм",
    ),
    _rule(
        "numeric_context", "digits", ANY_LANGUAGE,
        r"\d",
    ),
    _rule(
        "billing_discrepancy", "numeric_vs_numeric", ANY_LANGUAGE,
        r"(\d{3,}|\d{1,3}([\s.,]\d{3})+).*\b(если|хотя|вместо|а|но|однако|lekin|ammo|biroq|лекин|аммо|бироқ"
        r"|but|whereas|instead\s+of)\b.*(\d{3,}|\d{1,3}([\s.,]\d{3})+)",
    ),
    _rule(
        "billing_discrepancy", "why_x_if_y", ANY_LANGUAGE,
        r"\b(почему|зачем|nega|nimaga|нега|нимага|why)\b.*\d.*\b(если|хотя|когда|а|но|if|when|but|lekin|ammo|лекин)\b",
    ),
    _rule(
        "billing_complaint", "ru_billing_complaint", RU,
        r"(списал[иа]?|сняли|снял[аи]?)\s+(дважды|два\s+раза|лишн|больше)|двойн\w*\s+(списан|оплат)",
        r"не\s+(та|тa)\s+сумм|неправильн\w*\s+(сумм|цен|расчет|чек)|переплат|недосдач|не\s+сходится",
        r"деньги\s+не\s+(пришли|вернули|зачислил)|не\s+вернули\s+деньги",
    ),
    _rule(
        "billing_complaint", "en_billing_complaint", EN,
        r"charged\s+(twice|double|more)|double\s+charge|overcharg|wrong\s+(amount|price|total)|refund\s+not",
    ),
    _rule(
        "billing_amount_question", "amount_bigger_smaller", ANY_LANGUAGE,
        r"почему\s+(сумма|цена|чек|итог)\w*\s+(больше|меньше|выше|ниже|другая|разная)",
        r"(сумма|цена|чек|итог)\w*\s+(больше|меньше|выше|ниже)\s*,?\s*(чем|почему)",
        r"why\s+(is\s+)?(the\s+)?(amount|price|total|bill)\s+(is\s+)?(bigger|higher|smaller|lower|different)",
        r"nega\s+(summa|narx|chek)\w*\s+(ko'p|kam|boshqa)",
    ),
    _rule(
        "billing_uz", "uz_latin_billing", UZ_LATIN,
        r"pul\s+(yechildi|yechib|ketdi|qaytmadi|tushmadi)|ikki\s+marta\s+(yechildi|to'lov)|ortiqcha\s+(pul|to'lov)",
        r"(summa|narx|chek)\w*\s+(noto'?g'?ri|xato|boshqa)|to'lov\s+o'tmadi",
    ),
    _rule(
        "billing_uz", "uz_cyrillic_billing", UZ_CYRILLIC,
        r"пул\s+(ечилди|ечиб|кетди|қайтмади|тушмади)|икки\s+марта\s+(ечилди|тўлов)|ортиқча\s+(пул|тўлов)",
        r"(сумма|нарх|чек)\w*\s+(нотўғри|хато|бошқа)|тўлов\s+ўтмади",
    ),
    _rule(
        "onboarding", "ru_onboarding", RU,
        r"(хоч(у|ет|ем)|хот(им|ите|ел[аи]?))\s+(подключ|зарегистр|начать|стать\s+клиент)|как\s+подключиться",
        r"\bподключить\b|\bначать\b|\bнастроить\b|с\s+чего\s+начать|первый\s+раз",
        r"регистрац|новый\s+клиент|новая\s+точка|открываем\s+(новый|точку|филиал)|заявк\w*\s+на\s+подключ",
    ),
    _rule(
        "onboarding", "uz_latin_onboarding", UZ_LATIN,
        r"boshlash|ulanmoqchi|ro'yxatdan\s+o't|yangi\s+mijoz|yangi\s+filial\s+och|qanday\s+ulansa",
    ),
    _rule(
        "onboarding", "uz_cyrillic_onboarding", UZ_CYRILLIC,
        r"уланмоқчи|рўйхатдан\s+ўт|янги\s+мижоз|янги\s+филиал\s+оч",
    ),
    _rule(
        "onboarding", "en_onboarding", EN,
        r"sign\s*up|register|new\s+client|get\s+started|onboard",
    ),
    _rule(
        "media", "media_evidence", ANY_LANGUAGE,
        r"фото|скрин|видео|посмотрите|гляньте|прикрепил|вложени",
        r"\brasm|surat|\bvideo|qarang|ko'ring|расм|сурат|қаранг|кўринг",
        r"screenshot|\bscreen\b|photo|picture|look\s+at|attached",
    ),
    _rule(
        "question_opener", "opener", ANY_LANGUAGE,
        r"^\W*(почему|как\s+так|как\s+это|с\s+какой\s+стати|отчего|зачем|nega|nimaga|нега|нимага"
        r"|qanaqasiga|қанақасига|why|how\s+come)\b",
    ),
]


# ─── Urgency / sentiment / intent vocabulary ───

_SIGNAL_RULES = [
    _rule(
        "urgency", "urgent", ANY_LANGUAGE,
        r"срочн|немедленно|\burgent|\basap\b|\btez\b|\btezda\b|\btezroq|\bтез\b|\bтезда\b|тезроқ",
        r"shoshilinch|шошилинч|darrov|дарров|zudlik|зудлик",
        urgency=4,
    ),
    _rule(
        "urgency", "critical", ANY_LANGUAGE,
        r"критич|авари|critical|emergency",
        urgency=4,
    ),
    _rule(
        "urgency", "blocking", ANY_LANGUAGE,
        r"не\s+(можем|могу)\s+работать|работа\s+стоит|все\s+стоит|ishlay\s+olmayapmiz|иш\s+тўхтади",
        urgency=4,
    ),
    _rule(
        "positive", "positive", ANY_LANGUAGE,
        r"спасибо|благодар|отлично|супер|молодц|все\s+работает|заработал|класс",
        r"rahmat|raxmat|рахмат|раҳмат|zo'r|зўр|ajoyib|ажойиб|ishladi|ишлади",
        r"thanks|thank\s+you|great|awesome|works\s+now|perfect",
    ),
    _rule(
        "frustration", "frustration", ANY_LANGUAGE,
        r"безобрази|ужас|кошмар|сколько\s+можно|надоел|достал|бесит|издевател|отврат|возмутит",
        r"\bяна\b.*(ишламаяпти|муаммо)|qachongacha|қачонгача|jonga\s+tegdi|жонга\s+тегди|bezdim",
        r"terrible|awful|ridiculous|unacceptable|fed\s+up|!!!",
    ),
    _rule(
        "negative", "negative", ANY_LANGUAGE,
        r"плохо|недовол|yomon|ёмон|\bbad\b|\bpoor\b",
    ),
    _rule(
        "question_words", "question_words", ANY_LANGUAGE,
        r"\?|\bкак\b|\bчто\b|\bгде\b|\bкогда\b|\bпочему\b|\bзачем\b|\bкакой|\bкакая|\bсколько\b|подскажите|расскажите",
        r"\bqanday|\bnima|\bqayerda|\bqachon|\bnega\b|\bqaysi|\bқандай|\bнима|\bқаерда|\bқачон|\bнега\b|\bқайси",
        r"\bhow\b|\bwhat\b|\bwhere\b|\bwhen\b|\bwhy\b|\bwhich\b",
    ),
    _rule(
        "desire", "desire", ANY_LANGUAGE,
        r"хоч(у|ем|у\s+чтобы)|хотел[аи]?\s+бы|нужн[оа]|надо\b|можно\s+(ли\s+)?добав|добавьте|сделайте",
        r"\bkerak\b|\bкерак\b|istardim|истардим|qo'shib\s+bering|қўшиб\s+беринг|xohlaymiz|хоҳлаймиз",
        r"\bwant\b|\bneed\b|would\s+like|please\s+add|feature\s+request",
    ),
    _rule(
        "complaint", "complaint", ANY_LANGUAGE,
        r"жалоб|претензи|недовол|возмут|безобрази|ужасн|отврат|хамств|грубо",
        r"shikoyat|шикоят|norozi|норози",
        r"complain|unacceptable|terrible\s+service|rude",
    ),
]


# ─── Category keyword sets ───

_CATEGORY_RULES = [
    _rule(
        "category_billing", "billing", ANY_LANGUAGE,
        r"оплат|\bсчет|деньг|тариф|подписк|списан|возврат|баланс|\bкасс|терминал|эквайринг",
        r"\bpul\b|\bпул\b|to'?lov|тўлов|\bchek|\bчек|hisob|ҳисоб",
        r"invoice|billing|refund|payment|charge",
    ),
    _rule(
        "category_technical", "technical", ANY_LANGUAGE,
        r"\bбаг|ошибк|\bне\s*работа|слома|глюч|виснет|завис|тормоз|лагает|\bне\s*загружа|белый\s+экран",
        r"\bxato|ishlama|buzil|ишламай|\bхато",
        r"\bbug|crash|\berror|timeout|таймаут|\b50[0-4]\b|\b404\b",
    ),
    _rule(
        "category_integration", "integration", ANY_LANGUAGE,
        r"интеграц|подключ|\bapi\b|webhook|вебхук|синхрониз|iiko|r-?keeper|\bposter\b|jowi",
        r"wolt|yandex|яндекс|express24|payme|\bclick\b|uzum|integratsiya|интеграция|ulanish|уланиш",
    ),
    _rule(
        "category_feature_request", "feature_request", ANY_LANGUAGE,
        r"можно\s+ли\s+(добав|сделать)|хотел[аи]?\s+бы|добавьте|предлага|улучш|доработ",
        r"нов(ая|ую)\s+функци|было\s+бы\s+(хорошо|удобно)|\bkerak\b|\bкерак\b|qo'shib\s+bering",
        r"feature|would\s+be\s+nice|please\s+add",
    ),
    _rule("category_order", "order", ANY_LANGUAGE, r"заказ|\border|buyurtma|буюртма|\bzakaz"),
    _rule(
        "category_delivery", "delivery", ANY_LANGUAGE,
        r"доставк|курьер|курер|yetkazib|етказиб|dostavka|kuryer|\bdelivery|courier",
    ),
    _rule(
        "category_branch", "branch_region", ANY_LANGUAGE,
        r"филиал|\bfilial|\bbranch|регион|viloyat|вилоят|\btuman\b|\bтуман\b|\bгород|shahar|шаҳар",
    ),
    _rule(
        "category_menu", "menu", ANY_LANGUAGE,
        r"меню|menyu|\bmenu|блюд|товар|позици|\bцен[аыу]|стоп-?лист|ассортимент|taom|таом|narx|нарх",
    ),
    _rule(
        "category_app", "app", ANY_LANGUAGE,
        r"приложени|\bapp\b|мобильн|android|\bios\b|ilova|илова|обновлени|скача",
    ),
    _rule(
        "category_question", "question", ANY_LANGUAGE,
        r"\bкак\s|\bчто\s|\bгде\s|почему|подскажите|расскажите|qanday|қандай|\bnima|\bнима|qayerda",
        r"\bhow\b|\bwhat\b|\bwhere\b",
    ),
    _rule(
        "category_feedback", "feedback", ANY_LANGUAGE,
        r"спасибо|благодар|отлично|супер|молодц|хорошо|rahmat|raxmat|рахмат|раҳмат|zo'r|зўр|ajoyib",
        r"thanks|thank\s+you|great",
    ),
]


DEFAULT_RULES: tuple[PatternRule, ...] = tuple(
    _SIMPLE_INTENT_RULES + _PROBLEM_RULES + _CONTEXT_RULES + _SIGNAL_RULES + _CATEGORY_RULES
)

DEFAULT_CATALOG = PatternCatalog(rules=DEFAULT_RULES, source=f"defaults@{CATALOG_VERSION}")
