"""
Prompts for the language model collaborator.

Kept in the application layer, next to the parsers that validate the replies
(src.application.services.forensic_payload and intelligence_payload), so the
JSON shapes asked for here and the fields read back there stay in step.
Templates are filled with str.format, so literal braces are doubled.
"""

FORENSIC_SEARCH_QUERY = (
    "{entity} Malaysia corporate ownership shareholders subsidiaries directors Bursa"
)

FORENSIC_EXTRACTION_PROMPT = """Extract the corporate ownership structure for "{entity}" from these sources.

Sources:
{sources}

Return ONLY valid JSON (no markdown) with this structure:
{{
  "entity": {{
    "name": "<full legal name>",
    "stockCode": "<Bursa code if listed, or null>",
    "marketCap": "<if known, or null>",
    "isListed": <true|false>,
    "country": "Malaysia"
  }},
  "shareholders": [
    {{"name": "<name>", "percentage": <ownership %>, "type": "<Individual|Corporate|Fund|Government>", "isListed": <true|false>, "stockCode": "<if listed>"}}
  ],
  "subsidiaries": [
    {{"name": "<name>", "percentage": <ownership %>, "isListed": <true|false>, "stockCode": "<if listed>"}}
  ],
  "directors": [
    {{"name": "<name>", "position": "<designation>", "otherDirectorships": ["<other companies>"]}}
  ],
  "riskFlags": ["<circular ownership, layering or concentration risk noted>"],
  "sources": ["<source URLs used>"]
}}

Only include data you can verify from the sources. Use null when unknown.
"""

STOCK_NEWS_QUERY = "{name} {code} Bursa Malaysia stock news"

NO_NEWS_CONTEXT = "No recent news available"

STOCK_ANALYSIS_PROMPT = """You are a Bursa Malaysia stock analyst. Analyze this stock data and return ONLY valid JSON (no markdown, no code blocks).

Stock Data:
{stock_data}

Recent News Context:
{news_context}

Return this exact JSON structure:
{{
  "opportunityScore": <0-100>,
  "probabilityPositive": <0-100>,
  "confidence": <0-100>,
  "riskLevel": "<Low|Medium|High>",
  "suggestedBias": "<Conditional Buy|Hold|Sell>",
  "hiddenRadar": <true|false>,
  "trapFlag": <true|false>,
  "trapProbability": <0-100>,
  "cards": [
{cards}
  ],
  "riskMetrics": {{
    "volatility": <0-100>,
    "liquidityRisk": <0-100>,
    "governanceRisk": <0-100>,
    "structuralExposure": <0-100>,
    "macroSensitivity": <0-100>,
    "maxDrawdown": <0-100>,
    "riskTrend": "<Improving|Stable|Deteriorating>"
  }},
  "keyReason": "<one line key reason for the suggestion>"
}}

Base the analysis on price action, volume patterns, sector context and the news given. Avoid look-ahead bias: use only the data provided.
"""

ANALYSIS_CARD_CATEGORIES = (
    "Catalyst Strength",
    "Sentiment Momentum",
    "Structural Positioning",
    "Risk Exposure",
    "Macro Alignment",
    "Trap Risk",
)

ANALYSIS_CARD_TEMPLATE = (
    '    {{"category": "{category}", "icon": "<positive|neutral|negative>", '
    '"summary": "<2-3 line summary>", "probability": <0-100>}}'
)

DAILY_SUGGESTIONS_PROMPT = """You are a Bursa Malaysia trading intelligence analyst. Based on this market data, generate today's stock suggestions.

Market Data (all stocks):
{market_data}

Rules:
- Select 5-10 stocks to watch today
- Prioritize underrated stocks with high confluence to move up, not just top gainers
- Look for strong volume patterns, sector tailwinds, structural positioning and sentiment acceleration
- EXCLUDE stocks showing manipulation patterns (abnormal volume without fundamentals); list them in trapList instead
- Avoid look-ahead bias

Return ONLY valid JSON (no markdown):
{{
  "suggestions": [
    {{"symbol": "<stock symbol>", "name": "<stock name>", "confidence": <0-100>, "riskLevel": "<Low|Medium|High>", "bias": "<Conditional Buy|Hold|Watch>", "keyReason": "<1 line reason>", "riskTriggers": "<monitoring triggers>", "opportunityScore": <0-100>, "hiddenRadar": <true|false>, "trapFlag": <true|false>}}
  ],
  "trapList": [
    {{"symbol": "<stock symbol>", "name": "<stock name>", "trapProbability": <0-100>, "manipulationRisk": "<Low|Medium|High>", "reason": "<why flagged>"}}
  ],
  "marketSummary": "<2-3 lines overall market assessment>"
}}
"""

DEFAULT_MACRO_CONTEXT = "Analyze key global macro factors affecting Bursa Malaysia today."

MACRO_NEWS_QUERY = "global markets crude oil palm oil ringgit outlook Malaysia"

MACRO_ANALYSIS_PROMPT = """You are a global macro analyst focused on the impact on Bursa Malaysia. Analyze the current macro factors.

Context: {context}

Recent headlines:
{headlines}

Return ONLY valid JSON:
{{
  "factors": [
    {{"factor": "<e.g. Crude Oil, Gold, Palm Oil, USD/MYR, US Markets, Geopolitics>", "direction": "<Bullish|Bearish|Neutral>", "impactStrength": <0-100>, "sectorExposure": ["<affected sectors>"], "timeHorizon": "<Short|Medium>", "summary": "<2 line impact summary>"}}
  ],
  "overallBias": "<Bullish|Bearish|Neutral>",
  "overallSummary": "<3 line market macro outlook>"
}}
"""
