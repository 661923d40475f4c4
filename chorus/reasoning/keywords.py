"""Fixed keyword tables used by the request classifier.

All phrases are lowercase and matched as substrings of the lowercased
query. Dict order matters: it is the tie-break order wherever scores are
compared.
"""

from chorus.reasoning.models import (
    Complexity,
    ReasoningCategory,
    SynthesisStrategy,
    TopicDomain,
)

CATEGORY_KEYWORDS: dict[ReasoningCategory, tuple[str, ...]] = {
    ReasoningCategory.DEDUCTIVE: (
        "prove", "demonstrate", "show that", "follows from", "therefore",
        "it follows", "implies", "given that", "must be true", "logically",
    ),
    ReasoningCategory.INDUCTIVE: (
        "pattern", "trend", "generally", "usually", "often",
        "based on examples", "from observation", "evidence suggests",
        "in most cases", "typically",
    ),
    ReasoningCategory.ABDUCTIVE: (
        "explain", "best explanation", "reason for", "most likely explanation",
        "what could explain", "hypothesize", "account for", "plausible",
    ),
    ReasoningCategory.ANALOGICAL: (
        "similar to", "compare", "analogy", "metaphor", "reminds me of",
        "parallel", "corresponds to", "is like", "just like", "akin to",
    ),
    ReasoningCategory.CAUSAL: (
        "why", "cause", "effect", "consequence", "leads to",
        "due to", "because of", "results in", "impact of", "root cause",
    ),
    ReasoningCategory.PROBABILISTIC: (
        "probability", "likely", "chance", "odds", "risk",
        "uncertain", "possible", "maybe", "percent", "expected value",
    ),
    ReasoningCategory.SCIENTIFIC: (
        "experiment", "hypothesis", "empirical", "peer review", "methodology",
        "measurement", "scientific", "evidence", "replicate", "control group",
    ),
    ReasoningCategory.PHILOSOPHICAL: (
        "ethic", "moral", "meaning of life", "existence", "consciousness",
        "free will", "metaphysic", "epistemolog", "virtue", "philosoph",
    ),
}

DOMAIN_KEYWORDS: dict[TopicDomain, tuple[str, ...]] = {
    TopicDomain.PROGRAMMING: (
        "code", "function", "variable", "class", "method", "algorithm",
        "programming", "software", "debug", "compile", "javascript",
        "python", "java", "react", "api", "bug",
    ),
    TopicDomain.SCIENCE: (
        "experiment", "hypothesis", "research", "scientific", "theory",
        "observation", "physics", "chemistry", "biology", "equation",
        "formula", "theorem", "calculate", "solve",
    ),
    TopicDomain.BUSINESS: (
        "strategy", "market", "customer", "revenue", "profit", "business",
        "management", "sales", "finance", "startup", "investor",
    ),
    TopicDomain.CREATIVE: (
        "design", "art", "creative", "aesthetic", "visual", "imagination",
        "inspiration", "image", "paint", "story", "poem", "music",
    ),
    TopicDomain.TECHNICAL: (
        "system", "architecture", "infrastructure", "network", "database",
        "server", "security", "performance", "optimization", "deploy", "latency",
    ),
    TopicDomain.PHILOSOPHY: (
        "philosoph", "ethic", "moral", "metaphysic", "epistemolog",
        "existential", "virtue", "meaning of life",
    ),
    TopicDomain.PSYCHOLOGY: (
        "psycholog", "emotion", "behavior", "behaviour", "anxiety",
        "stress", "motivation", "cognitive", "mental", "therapy",
    ),
    TopicDomain.MEDICINE: (
        "medical", "medicine", "disease", "symptom", "diagnosis",
        "treatment", "patient", "doctor", "health", "drug",
    ),
    TopicDomain.LAW: (
        "legal", "contract", "court", "regulation", "compliance",
        "lawsuit", "attorney", "liability", "statute", "law ",
    ),
    TopicDomain.EDUCATION: (
        "teach", "learn", "student", "course", "curriculum",
        "lesson", "school", "exam", "tutor", "homework",
    ),
}

COMPLEXITY_KEYWORDS: dict[Complexity, tuple[str, ...]] = {
    Complexity.HIGH: (
        "multiple", "complex", "intricate", "sophisticated", "advanced",
        "comprehensive", "detailed", "thorough", "in-depth",
    ),
    Complexity.MEDIUM: (
        "analyze", "evaluate", "compare", "consider", "examine",
        "assess", "review", "investigate",
    ),
    Complexity.LOW: (
        "simple", "basic", "quick", "brief", "straightforward",
        "easy", "direct", "clear",
    ),
}

COMPLEXITY_WEIGHTS: dict[Complexity, int] = {
    Complexity.HIGH: 2,
    Complexity.MEDIUM: 1,
    Complexity.LOW: -1,
}

TOOL_KEYWORDS: dict[str, tuple[str, ...]] = {
    "codeExecution": (
        "run code", "execute", "test code", "compile", "debug",
        "output of", "result of", "what does this do",
    ),
    "webSearch": (
        "search", "find information", "look up", "research",
        "current", "latest", "recent", "news",
    ),
    "fileProcessing": (
        "file", "document", "pdf", "excel", "csv", "json", "parse", "extract",
    ),
    "imageGeneration": (
        "create image", "image", "picture", "draw", "visualize",
        "diagram", "illustration", "sketch",
    ),
    "dataAnalysis": (
        "analyze data", "statistics", "chart", "graph", "trend",
        "correlation", "pattern", "dataset",
    ),
    "calculation": (
        "calculate", "compute", "math", "formula", "equation",
        "solve", "arithmetic", "numerical",
    ),
}

DEFAULT_TOOL_PRIORITY = 0.5

TOOL_PRIORITIES: dict[TopicDomain, dict[str, float]] = {
    TopicDomain.PROGRAMMING: {
        "codeExecution": 0.9,
        "fileProcessing": 0.7,
        "webSearch": 0.6,
        "dataAnalysis": 0.5,
        "calculation": 0.4,
        "imageGeneration": 0.2,
    },
    TopicDomain.SCIENCE: {
        "calculation": 0.9,
        "dataAnalysis": 0.8,
        "imageGeneration": 0.6,
        "webSearch": 0.5,
        "fileProcessing": 0.4,
        "codeExecution": 0.3,
    },
    TopicDomain.BUSINESS: {
        "dataAnalysis": 0.9,
        "webSearch": 0.8,
        "fileProcessing": 0.7,
        "calculation": 0.6,
        "imageGeneration": 0.5,
        "codeExecution": 0.3,
    },
    TopicDomain.CREATIVE: {
        "imageGeneration": 0.9,
        "webSearch": 0.6,
        "fileProcessing": 0.5,
        "dataAnalysis": 0.4,
        "calculation": 0.2,
        "codeExecution": 0.2,
    },
    TopicDomain.TECHNICAL: {
        "codeExecution": 0.8,
        "dataAnalysis": 0.7,
        "fileProcessing": 0.7,
        "webSearch": 0.6,
        "calculation": 0.5,
        "imageGeneration": 0.3,
    },
}

VAGUE_PRONOUNS = frozenset({"this", "that", "it"})
UNDERSPECIFIED_OPENERS = ("how to", "what is", "explain", "help with")
VAGUE_MARKERS = ("maybe", "perhaps", "might", "could", "possibly")

MESSAGE_TYPE_KEYWORDS: dict[str, tuple[str, ...]] = {
    "creative": ("create", "design", "imagine", "artistic", "innovative", "brainstorm"),
    "analytical": ("analyze", "examine", "evaluate", "assess", "investigate", "study"),
    "logical": ("prove", "calculate", "solve", "logic", "reason", "deduce"),
    "strategic": ("plan", "strategy", "approach", "method", "organize", "structure"),
    "emotional": ("feel", "emotion", "personal", "relationship", "empathy", "understand"),
}

# Closed mapping; GENERAL is resolved from message types instead.
CATEGORY_STRATEGIES: dict[ReasoningCategory, SynthesisStrategy] = {
    ReasoningCategory.DEDUCTIVE: SynthesisStrategy.LOGICAL,
    ReasoningCategory.INDUCTIVE: SynthesisStrategy.COLLABORATIVE,
    ReasoningCategory.ABDUCTIVE: SynthesisStrategy.ANALYTICAL,
    ReasoningCategory.ANALOGICAL: SynthesisStrategy.CREATIVE,
    ReasoningCategory.CAUSAL: SynthesisStrategy.CAUSAL,
    ReasoningCategory.PROBABILISTIC: SynthesisStrategy.PROBABILISTIC,
    ReasoningCategory.SCIENTIFIC: SynthesisStrategy.SCIENTIFIC,
    ReasoningCategory.PHILOSOPHICAL: SynthesisStrategy.PHILOSOPHICAL,
}

MESSAGE_TYPE_STRATEGIES: dict[str, SynthesisStrategy] = {
    "creative": SynthesisStrategy.CREATIVE,
    "analytical": SynthesisStrategy.ANALYTICAL,
    "logical": SynthesisStrategy.LOGICAL,
    "strategic": SynthesisStrategy.STRATEGIC,
    "emotional": SynthesisStrategy.EMPATHETIC,
}

PROCESSING_STRATEGIES: dict[Complexity, dict[ReasoningCategory, str]] = {
    Complexity.HIGH: {
        ReasoningCategory.DEDUCTIVE: "systematic_deduction",
        ReasoningCategory.INDUCTIVE: "comprehensive_sampling",
        ReasoningCategory.ABDUCTIVE: "multi_hypothesis",
        ReasoningCategory.ANALOGICAL: "deep_mapping",
        ReasoningCategory.CAUSAL: "mechanism_analysis",
        ReasoningCategory.PROBABILISTIC: "bayesian_inference",
        ReasoningCategory.SCIENTIFIC: "experimental_design",
        ReasoningCategory.PHILOSOPHICAL: "dialectical_analysis",
    },
    Complexity.MEDIUM: {
        ReasoningCategory.DEDUCTIVE: "standard_deduction",
        ReasoningCategory.INDUCTIVE: "pattern_recognition",
        ReasoningCategory.ABDUCTIVE: "best_explanation",
        ReasoningCategory.ANALOGICAL: "similarity_matching",
        ReasoningCategory.CAUSAL: "correlation_analysis",
        ReasoningCategory.PROBABILISTIC: "likelihood_estimation",
        ReasoningCategory.SCIENTIFIC: "evidence_review",
        ReasoningCategory.PHILOSOPHICAL: "conceptual_analysis",
    },
    Complexity.LOW: {
        ReasoningCategory.DEDUCTIVE: "simple_inference",
        ReasoningCategory.INDUCTIVE: "basic_generalization",
        ReasoningCategory.ABDUCTIVE: "obvious_explanation",
        ReasoningCategory.ANALOGICAL: "surface_similarity",
        ReasoningCategory.CAUSAL: "direct_causation",
        ReasoningCategory.PROBABILISTIC: "rough_estimation",
        ReasoningCategory.SCIENTIFIC: "fact_check",
        ReasoningCategory.PHILOSOPHICAL: "definition_lookup",
    },
}

REASONING_STEPS: dict[ReasoningCategory, tuple[str, ...]] = {
    ReasoningCategory.DEDUCTIVE: (
        "Identify premises and rules",
        "Apply logical deduction",
        "Derive conclusions",
    ),
    ReasoningCategory.INDUCTIVE: (
        "Collect observations and examples",
        "Identify patterns and regularities",
        "Generalize to broader principles",
    ),
    ReasoningCategory.ABDUCTIVE: (
        "Analyze available evidence",
        "Generate possible explanations",
        "Select most plausible hypothesis",
    ),
    ReasoningCategory.ANALOGICAL: (
        "Identify source and target domains",
        "Map structural similarities",
        "Transfer knowledge and insights",
    ),
    ReasoningCategory.CAUSAL: (
        "Identify potential causes and effects",
        "Analyze causal mechanisms",
        "Establish causal relationships",
    ),
    ReasoningCategory.PROBABILISTIC: (
        "Assess available evidence",
        "Calculate probabilities and uncertainties",
        "Make probabilistic inferences",
    ),
    ReasoningCategory.SCIENTIFIC: (
        "Review available evidence",
        "Assess methodology",
        "Draw supported conclusions",
    ),
    ReasoningCategory.PHILOSOPHICAL: (
        "Clarify key concepts",
        "Examine competing positions",
        "Weigh the arguments",
    ),
}

CATEGORY_VALIDATION: dict[ReasoningCategory, tuple[str, ...]] = {
    ReasoningCategory.DEDUCTIVE: ("Logical consistency check", "Premise validation"),
    ReasoningCategory.INDUCTIVE: ("Sample representativeness", "Pattern reliability"),
    ReasoningCategory.ABDUCTIVE: ("Explanation adequacy", "Alternative hypotheses"),
    ReasoningCategory.ANALOGICAL: ("Structural similarity", "Relevance assessment"),
    ReasoningCategory.CAUSAL: ("Mechanism plausibility", "Confounding factors"),
    ReasoningCategory.PROBABILISTIC: ("Evidence quality", "Uncertainty quantification"),
    ReasoningCategory.SCIENTIFIC: ("Reproducibility", "Method soundness"),
    ReasoningCategory.PHILOSOPHICAL: ("Argument validity", "Counterexamples"),
}

DOMAIN_VALIDATION: dict[TopicDomain, tuple[str, ...]] = {
    TopicDomain.PROGRAMMING: ("Code execution", "Test cases", "Peer review"),
    TopicDomain.SCIENCE: ("Experimental validation", "Peer review"),
    TopicDomain.BUSINESS: ("Market validation", "ROI analysis"),
}
